"""Database infrastructure module.

Provides database configuration and connection management for the release
synchronization pipeline.
"""

from .config import (
    DatabaseConfig,
    DatabasePoolConfig,
    get_database_config,
    reset_database_config,
)
from .connection import DatabaseConnectionManager

__all__ = [
    "DatabaseConfig",
    "DatabaseConnectionManager",
    "DatabasePoolConfig",
    "get_database_config",
    "reset_database_config",
]
