"""Async engine and session handling for the releases database."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import DatabaseConfig, get_database_config

logger = logging.getLogger(__name__)


class DatabaseConnectionManager:
    """Lazily creates the engine and hands out sessions.

    Sessions from ``get_transaction()`` leave commits to the caller, roll back
    on error and are closed on exit.
    """

    def __init__(self, config: DatabaseConfig | None = None):
        self.config = config or get_database_config()
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            # Releases stay readable after the orchestrator commits mid-run
            self._session_factory = async_sessionmaker(
                bind=self.engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._session_factory

    def _create_engine(self) -> AsyncEngine:
        url = self.config.get_sqlalchemy_url()
        kwargs: dict[str, Any] = {"echo": self.config.should_echo_sql()}
        if not self.config.is_sqlite:
            kwargs.update(self.config.pool.model_dump())

        engine = create_async_engine(url, **kwargs)
        logger.info(
            "Created database engine",
            extra={"sqlite": self.config.is_sqlite, "pool_size": kwargs.get("pool_size")},
        )
        return engine

    @asynccontextmanager
    async def get_transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session whose changes are only kept if the caller commits."""
        session = self.session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def close(self) -> None:
        """Dispose of the engine; a later call to ``engine`` creates a new one."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")
