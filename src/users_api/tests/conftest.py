"""
Core pytest configuration for the entire test suite.

This module provides only the database setup and the logging install that
ALL types of tests (classifier, repository, service, API, client) share.

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py

and imported at the bottom of this file so they are available everywhere.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before importing modules
# that might initialize them (Faker, SQLAlchemy, httpx, ...).
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.config.settings import Settings
from users_api.core.logging.builder import setup_logging
from users_api.database.base import Base
from users_api.database.session import Database

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Settings for the test session: text logs on the console, no file handlers."""
    return Settings(
        ENV="testing",
        TESTING=True,
        LOG_FORMAT="text",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=True,
        AUTO_CREATE_SCHEMA=False,
        DATABASE_URL=TEST_DATABASE_URL,
    )


# The `autouse=True` part means pytest applies this fixture without it being requested.
@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings):
    """
    Install application logging once for the whole session.

    pytest attaches its capture handler (caplog) per test, after this runs, so
    `caplog.records` keeps working.
    """
    setup_logging(test_settings)
    yield


# ------------------------------------------------------------------------------------------------
# Determining the Test Database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """
    Return the database URL without username and password, for logging.
    """
    parsed = urlparse(db_url)
    if parsed.hostname is None:
        return f"{parsed.scheme}://{parsed.path}"
    return f"{parsed.scheme}://{parsed.hostname}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    Determine the test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI override, e.g. a disposable Postgres)
    2. In-memory SQLite: fast, isolated, no server needed
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return "sqlite+aiosqlite:///:memory:"


TEST_DATABASE_URL = get_test_database_url()
logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def database() -> AsyncGenerator[Database, None]:
    """
    A fresh Database per test with the schema created.

    With the in-memory SQLite default every test starts from an empty database;
    against a server database the tables are dropped on teardown.
    """
    db = Database(TEST_DATABASE_URL)
    await db.create_schema()

    yield db

    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await db.dispose()


@pytest.fixture()
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """
    An AsyncSession on the test database (expire_on_commit=False).

    Repositories commit their own writes, so isolation comes from the
    per-test database rather than a wrapping transaction.
    """
    async with database.session() as session:
        yield session


# Fixtures from test_fixtures/, registered globally
from .test_fixtures.repository_fixtures import (  # noqa: E402
    user_repository,
    user_service,
    sample_user_data,
    create_user,
    created_user,
    multiple_users,
)
from .test_fixtures.api_fixtures import (  # noqa: E402
    app,
    api_client,
    users_client,
)
