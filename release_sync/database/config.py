"""Database settings read from ``DATABASE_*`` environment variables.

Either ``DATABASE_URL`` is set, or the URL is assembled from
``DATABASE_HOST``, ``DATABASE_PORT``, ``DATABASE_DATABASE``,
``DATABASE_USERNAME`` and ``DATABASE_PASSWORD``. Pool sizing is read from
``DATABASE_POOL__<SETTING>``, e.g. ``DATABASE_POOL__POOL_SIZE=10``.
"""

import os
from urllib.parse import quote_plus, urlparse

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SYNC_DRIVER_SUFFIXES = ("+asyncpg", "+aiosqlite")


class DatabasePoolConfig(BaseModel):
    """Connection pool sizing, ignored for SQLite."""

    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_pre_ping: bool = True
    pool_recycle: int = Field(default=3600, description="Seconds before a connection is replaced")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a free connection")


class DatabaseConfig(BaseSettings):
    """Where the releases database lives and how to connect to it."""

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
    host: str = "localhost"
    port: int = 5432
    database: str = "release_sync"
    username: str = "postgres"
    password: SecretStr | None = None

    pool: DatabasePoolConfig = Field(default_factory=DatabasePoolConfig)
    echo_sql: bool = Field(default=False, description="Log SQL statements outside production")

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v and not urlparse(v).scheme:
            raise ValueError("Invalid database URL format")
        return v or None

    @model_validator(mode="after")
    def assemble_database_url(self) -> "DatabaseConfig":
        """Build a PostgreSQL URL from the components when no URL is given."""
        if self.database_url is None and self.password is not None:
            password = quote_plus(self.password.get_secret_value())
            self.database_url = (
                f"postgresql+asyncpg://{self.username}:{password}"
                f"@{self.host}:{self.port}/{self.database}"
            )
        return self

    def get_sqlalchemy_url(self) -> str:
        """Return the async driver URL.

        Raises:
            ValueError: If neither a URL nor a password is configured
        """
        if not self.database_url:
            raise ValueError(
                "No database URL available - set DATABASE_URL or DATABASE_PASSWORD"
            )
        return self.database_url

    def get_alembic_url(self) -> str:
        """Return the URL with the async driver suffix removed."""
        url = self.get_sqlalchemy_url()
        for suffix in _SYNC_DRIVER_SUFFIXES:
            url = url.replace(suffix, "")
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.get_sqlalchemy_url().startswith("sqlite")

    def should_echo_sql(self) -> bool:
        """SQL echo is never enabled when ENVIRONMENT is production."""
        in_production = os.getenv("ENVIRONMENT", "development").lower() == "production"
        return self.echo_sql and not in_production


_config_instance: DatabaseConfig | None = None


def get_database_config() -> DatabaseConfig:
    """Return the process-wide database settings, read on first use."""
    global _config_instance

    if _config_instance is None:
        _config_instance = DatabaseConfig()
    return _config_instance


def reset_database_config() -> None:
    """Forget cached settings so the environment is read again."""
    global _config_instance
    _config_instance = None
