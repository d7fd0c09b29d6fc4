from .user import MAX_USER_ID, User, UserChanges

__all__ = ["MAX_USER_ID", "User", "UserChanges"]
