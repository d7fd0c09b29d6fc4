"""
User service: CRUD over a `UserRepositoryPort`.

Error policy:
    - A missing id, or one outside the id column range, raises NotFoundError directly.
    - Any PersistenceError from the port is classified here, exactly once, via
      `classify_database_error`, and the classified error is raised with the
      persistence error chained as its cause.
    - Input shape is validated by the caller (HTTP schemas); nothing is retried.
"""

import logging
from contextlib import contextmanager
from dataclasses import replace

from users_api.domain.user import MAX_USER_ID, User, UserChanges
from users_api.exceptions.base import NotFoundError
from users_api.exceptions.classifier import classify_database_error
from users_api.exceptions.mapper import PersistenceError
from users_api.repositories.base import UserRepositoryPort

logger = logging.getLogger(__name__)


@contextmanager
def _classified(operation: str):
    try:
        yield
    except PersistenceError as exc:
        error = classify_database_error(exc.info)
        logger.info(
            "service.persistence_error",
            extra={"operation": operation, "category": error.error_code, "db_code": exc.info.code},
        )
        raise error from exc


class UserService:
    def __init__(self, repository: UserRepositoryPort):
        self.repository = repository

    async def list_users(self) -> list[User]:
        # Unbounded on purpose: no pagination for this resource.
        with _classified("list"):
            return await self.repository.find_all()

    async def get_user(self, user_id: int) -> User:
        if not 1 <= user_id <= MAX_USER_ID:
            raise NotFoundError(f"User {user_id} not found")
        with _classified("get"):
            user = await self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def create_user(self, name: str, email: str) -> User:
        with _classified("create"):
            created = await self.repository.save(User(name=name, email=email))
        logger.info("service.user_created", extra={"id": created.id})
        return created

    async def update_user(self, user_id: int, changes: UserChanges) -> User:
        """Overwrite only the supplied fields; NotFoundError if the user is absent."""
        existing = await self.get_user(user_id)
        updated = replace(existing, **changes.supplied())

        with _classified("update"):
            saved = await self.repository.save(updated)
        if saved is None:
            raise NotFoundError(f"User {user_id} not found")
        return saved

    async def delete_user(self, user_id: int) -> None:
        await self.get_user(user_id)
        with _classified("delete"):
            deleted = await self.repository.delete(user_id)
        if not deleted:
            raise NotFoundError(f"User {user_id} not found")
        logger.info("service.user_deleted", extra={"id": user_id})
