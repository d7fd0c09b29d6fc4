import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .classifier import DatabaseErrorInfo, extract_error_info

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """
    Raised by persistence adapters when the database rejects an operation.

    Carries the raw, unclassified `DatabaseErrorInfo`. Classification into an
    application category happens once, at the service boundary.
    """

    def __init__(self, info: DatabaseErrorInfo, operation: str | None = None):
        super().__init__(info.detail or f"database error (code: {info.code})")
        self.info = info
        self.operation = operation


@asynccontextmanager
async def persistence_errors(db: AsyncSession, operation: str, model_name: str | None = None):
    """
    Usage:
        async with persistence_errors(self.db, "save", "User"):
            ... DB ops that may raise ...
    Rolls the session back on any SQLAlchemy error and re-raises it as a PersistenceError.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        try:
            await db.rollback()
        except SQLAlchemyError:
            # Rollback failing is unusual; keep the original error as the one surfaced.
            logger.exception("Failed to rollback session after database error", extra={"model": model_name})

        info = extract_error_info(exc)
        logger.info(
            "persistence.error",
            extra={"model": model_name, "operation": operation, "db_code": info.code, "constraint": info.constraint},
        )
        raise PersistenceError(info, operation) from exc
