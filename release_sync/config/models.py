"""Pydantic configuration models for the release synchronization pipeline.

The configuration hierarchy follows this structure:
- Config: Root configuration containing all subsystems
- SystemConfig: Core system settings (log level, environment)
- Component-specific configs: Queue, Git, Packages, Jobs

Environment variables are substituted using the format ${VAR_NAME} with
optional defaults: ${VAR_NAME:default_value}

Database settings are read from the environment separately, see
``release_sync.database.config``.
"""

import os
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from release_sync.models.enums import RETRYABLE_RELEASE_REASONS, ReleaseReason

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def _resolve(match: re.Match[str]) -> str:
    name, default = match.groups()
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Required environment variable '{name}' not found")
    return value


def _expand(value: Any) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(_resolve, value)
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand(v) for v in value]
    return value


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class BaseConfigModel(BaseModel):
    """Strict configuration section with ${VAR} and ${VAR:default} expansion."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def substitute_env_vars(cls, values: Any) -> Any:
        """Expand environment references in every string of the raw section.

        Raises:
            ValueError: If a reference without default names an unset variable
        """
        if not isinstance(values, dict):
            return values
        return _expand(values)


class SystemConfig(BaseConfigModel):
    """Core system configuration settings."""

    log_level: LogLevel = Field(
        default=LogLevel.INFO, description="System-wide logging level"
    )

    environment: str = Field(
        default="development",
        description="Deployment environment (development, staging, production)",
    )


class QueueConfig(BaseConfigModel):
    """Job queue connection configuration."""

    url: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )

    key_prefix: str = Field(
        default="release-sync", description="Prefix for all queue keys in Redis"
    )

    @field_validator("url")
    @classmethod
    def validate_queue_url(cls, v: str) -> str:
        """Validate queue URL scheme."""
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("Queue URL must use redis://, rediss:// or unix://")
        return v


class GitConfig(BaseConfigModel):
    """Git command configuration."""

    executable: str = Field(default="git", description="Git executable to run")

    timeout: int = Field(
        default=60, ge=1, le=600, description="git ls-remote timeout in seconds"
    )


class PackagesConfig(BaseConfigModel):
    """Package manifest location."""

    data_dir: str = Field(
        default="data/packages",
        description="Directory holding one <name>.yml manifest per package",
    )


class JobConfig(BaseConfigModel):
    """Configuration of one kind of queued job."""

    name: str = Field(description="Job name, also the first part of the job id")

    queue: str = Field(description="Queue the job is added to")

    interval: int = Field(
        default=30,
        ge=0,
        description="Seconds between the start times of consecutive jobs",
    )

    timeout: int = Field(
        default=3600, ge=1, description="Job execution timeout in seconds"
    )

    retryable_reasons: list[ReleaseReason] = Field(
        default_factory=lambda: sorted(RETRYABLE_RELEASE_REASONS, key=lambda r: r.value),
        description="Failure reasons for which a failed release is dispatched again",
    )

    @field_validator("name", "queue")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate identifiers are not blank."""
        if not v or v.strip() == "":
            raise ValueError("Job name and queue cannot be empty")
        return v.strip()


class JobsConfig(BaseConfigModel):
    """Configuration of the jobs this pipeline enqueues."""

    build_release: JobConfig = Field(
        default_factory=lambda: JobConfig(name="build-release", queue="build-release"),
        description="Build-release job configuration",
    )


class Config(BaseConfigModel):
    """Root configuration containing all subsystem configurations."""

    system: SystemConfig = Field(
        default_factory=SystemConfig, description="Core system configuration"
    )

    queue: QueueConfig = Field(
        default_factory=QueueConfig, description="Job queue configuration"
    )

    git: GitConfig = Field(default_factory=GitConfig, description="Git configuration")

    packages: PackagesConfig = Field(
        default_factory=PackagesConfig, description="Package manifest configuration"
    )

    jobs: JobsConfig = Field(default_factory=JobsConfig, description="Job settings")
