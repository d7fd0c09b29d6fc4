"""
SQLAlchemy implementation of `UserRepositoryPort`.

Each write is its own unit of work: the adapter flushes, refreshes and commits
inside `persistence_errors(...)`, which rolls back and re-raises database
failures as `PersistenceError` (raw, unclassified).

Logging follows the structured-event style used across the app:
- DEBUG: operation start, with the keys provided (never the values).
- INFO: success, with the id and duration_ms.
"""

import logging
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.domain.user import User
from users_api.exceptions.mapper import persistence_errors
from users_api.models.user import UserRecord

logger = logging.getLogger(__name__)

MODEL_NAME = "User"


class SqlAlchemyUserRepository:
    """
    Users table access through an AsyncSession.

    Args:
        db: the async session for the current request (FastAPI dependency or test fixture).
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # =================================================================================================================
    # Read operations
    # =================================================================================================================

    async def find_all(self) -> list[User]:
        async with persistence_errors(self.db, "find_all", MODEL_NAME):
            result = await self.db.execute(select(UserRecord).order_by(UserRecord.id))
            records = result.scalars().all()

        logger.debug("repo.find_all", extra={"model": MODEL_NAME, "count": len(records)})
        return [record.to_domain() for record in records]

    async def find_by_id(self, user_id: int) -> User | None:
        async with persistence_errors(self.db, "find_by_id", MODEL_NAME):
            record = await self.db.get(UserRecord, user_id)

        logger.debug("repo.find_by_id", extra={"model": MODEL_NAME, "id": user_id, "found": record is not None})
        return record.to_domain() if record is not None else None

    # =================================================================================================================
    # Write operations
    # =================================================================================================================

    async def save(self, user: User) -> User | None:
        """
        Insert a new row (user.id is None) or overwrite name/email of an existing one.

        Returns the stored user with its generated id, or None if the row to
        overwrite disappeared in the meantime.
        """
        operation = "insert" if user.id is None else "update"
        logger.debug("repo.save.start", extra={"model": MODEL_NAME, "operation": operation, "id": user.id})
        start = time.perf_counter()

        async with persistence_errors(self.db, operation, MODEL_NAME):
            if user.id is None:
                record = UserRecord(name=user.name, email=user.email)
                self.db.add(record)
            else:
                record = await self.db.get(UserRecord, user.id)
                if record is None:
                    logger.info("repo.save.missing", extra={"model": MODEL_NAME, "id": user.id})
                    return None
                record.name = user.name
                record.email = user.email

            # flush() surfaces constraint violations and assigns the id before commit
            await self.db.flush()
            await self.db.refresh(record)
            await self.db.commit()

        logger.info(
            "repo.save.success",
            extra={
                "model": MODEL_NAME,
                "operation": operation,
                "id": record.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return record.to_domain()

    async def delete(self, user_id: int) -> bool:
        async with persistence_errors(self.db, "delete", MODEL_NAME):
            record = await self.db.get(UserRecord, user_id)
            if record is None:
                logger.info("repo.delete.missing", extra={"model": MODEL_NAME, "id": user_id})
                return False
            await self.db.delete(record)
            await self.db.commit()

        logger.info("repo.delete.success", extra={"model": MODEL_NAME, "id": user_id})
        return True
