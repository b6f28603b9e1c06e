"""Configuration management for the release synchronization pipeline.

Example usage:
    from release_sync.config import load_config

    config = load_config()
    interval = config.jobs.build_release.interval
"""

from .exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    ConfigurationValidationError,
)
from .loader import ConfigurationLoader, load_config
from .models import (
    Config,
    GitConfig,
    JobConfig,
    JobsConfig,
    LogLevel,
    PackagesConfig,
    QueueConfig,
    SystemConfig,
)

__all__ = [
    "Config",
    "ConfigurationError",
    "ConfigurationFileError",
    "ConfigurationLoader",
    "ConfigurationValidationError",
    "GitConfig",
    "JobConfig",
    "JobsConfig",
    "LogLevel",
    "PackagesConfig",
    "QueueConfig",
    "SystemConfig",
    "load_config",
]
