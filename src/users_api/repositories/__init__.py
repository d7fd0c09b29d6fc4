"""
Repository layer.

`UserRepositoryPort` is the capability the service depends on (find-all,
find-by-id, save, delete). `SqlAlchemyUserRepository` is the adapter that
implements it on an AsyncSession.

Usage:
    from users_api.repositories import SqlAlchemyUserRepository, UserRepositoryPort
"""

from .base import UserRepositoryPort
from .user_repository import SqlAlchemyUserRepository

__all__ = [
    "UserRepositoryPort",
    "SqlAlchemyUserRepository",
]
