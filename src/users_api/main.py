"""Users API: FastAPI application factory and server entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from users_api.api.v1 import health, users
from users_api.api.v1.error_handlers import register_exception_handlers
from users_api.config.settings import Settings, get_settings
from users_api.core.logging import RequestIDMiddleware, setup_logging
from users_api.database.session import Database

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    database: Database | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: defaults to get_settings().
        database: an already-open Database (tests). It is attached to app.state right away
            and left open on shutdown; otherwise the lifespan opens and disposes its own.
        configure_logging: apply the dictConfig logging setup on startup.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logging:
            setup_logging(settings)

        owns_database = getattr(app.state, "db", None) is None
        if owns_database:
            app.state.db = Database(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)
        if settings.create_schema_on_startup:
            await app.state.db.create_schema()

        logger.info("app.startup", extra={"env": settings.ENV})
        yield
        logger.info("app.shutdown")

        if owns_database:
            await app.state.db.dispose()
            app.state.db = None

    # Interactive docs only outside production.
    docs_enabled = settings.docs_enabled
    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.db = database

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)

    return app


def run() -> None:
    """Serve the app with uvicorn (console script `users-api`)."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
