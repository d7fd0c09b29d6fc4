import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .base import Base

logger = logging.getLogger(__name__)


def _engine_options(database_url: str, echo: bool) -> dict:
    options: dict = {"echo": echo, "pool_pre_ping": True}
    url = make_url(database_url)
    # An in-memory SQLite database lives inside a single connection; share it.
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    return options


class Database:
    """
    Owns the AsyncEngine and the session factory for one application instance.

    Created in the app lifespan and stored on `app.state.db`; no import-time engine.
    """

    def __init__(self, database_url: str, *, echo: bool = False):
        self.engine: AsyncEngine = create_async_engine(database_url, **_engine_options(database_url, echo))
        # expire_on_commit=False: returned rows stay readable after the repository commits.
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            yield session

    async def create_schema(self) -> None:
        """Create every mapped table that does not exist yet."""
        # Import for side effects: registers the table mappings on Base.metadata.
        from users_api import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database.schema_created", extra={"tables": sorted(Base.metadata.tables)})

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session bound to the app's Database and closes it after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
