from .user import DeleteResponse, UserCreate, UserRead, UserUpdate

__all__ = ["DeleteResponse", "UserCreate", "UserRead", "UserUpdate"]
