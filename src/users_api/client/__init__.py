from .users_client import DEFAULT_BASE_URL, UsersClient

__all__ = ["DEFAULT_BASE_URL", "UsersClient"]
