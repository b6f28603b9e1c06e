"""Alembic migration environment for the releases database.

The URL comes from ``DATABASE_URL`` or the ``DATABASE_*`` settings, falling
back to ``sqlalchemy.url`` in alembic.ini. Online migrations run through the
async driver the application uses.
"""

import asyncio
import contextlib
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context
from release_sync.database.config import DatabaseConfig
from release_sync.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


def get_url(async_driver: bool) -> str:
    url = None
    with contextlib.suppress(ValueError):
        url = DatabaseConfig().get_alembic_url()
    url = url or config.get_main_option("sqlalchemy.url") or ""

    if async_driver:
        for sync_prefix, async_prefix in _ASYNC_DRIVERS.items():
            if url.startswith(sync_prefix):
                return async_prefix + url[len(sync_prefix) :]
    return url


def run_migrations_offline() -> None:
    """Emit migration SQL to the script output without connecting."""
    context.configure(
        url=get_url(async_driver=False),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(get_url(async_driver=True), poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
