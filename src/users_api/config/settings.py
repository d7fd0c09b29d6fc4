from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase


class Settings(BaseSettings):
    """
    Application settings loaded from environment (and an optional `.env` file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # HTTP
    API_TITLE: str = "Users API"
    API_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database configuration
    # A full URL (env: DATABASE_URL) wins over the POSTGRES_* parts below.
    DATABASE_URL_OVERRIDE: str | None = Field(default=None, validation_alias="DATABASE_URL")
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "users"

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    # None -> create tables on startup everywhere except production
    AUTO_CREATE_SCHEMA: bool | None = None

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/users-api")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        - DATABASE_URL from the environment is used as-is when provided.
        - With TESTING=True and TEST_POSTGRES_DB set, the test database name is used
          so tests never touch the regular database.
        - Otherwise the URL is composed from the POSTGRES_* settings.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        db_name = self.TEST_POSTGRES_DB if (self.TESTING and self.TEST_POSTGRES_DB) else self.POSTGRES_DB
        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{db_name}"
        )

    @property
    def create_schema_on_startup(self) -> bool:
        if self.AUTO_CREATE_SCHEMA is not None:
            return self.AUTO_CREATE_SCHEMA
        return self.ENV != "production"

    @property
    def docs_enabled(self) -> bool:
        return self.ENV != "production"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before validation, so `LOG_LEVEL=debug` is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


# get_settings() always returns the same settings from the environment,
# so it is cached.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
