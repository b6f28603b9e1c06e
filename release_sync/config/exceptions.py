"""Exceptions raised while loading the pipeline configuration."""

from typing import Any


class ConfigurationError(Exception):
    """Base exception for configuration problems.

    ``details`` carries structured context for logging.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationFileError(ConfigurationError):
    """The configuration file is missing, unreadable or not a YAML mapping."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.file_path = file_path


class ConfigurationValidationError(ConfigurationError):
    """The configuration values do not pass model validation."""

    def __init__(
        self,
        message: str,
        validation_errors: list[Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            validation_errors: Error dicts as returned by ``ValidationError.errors()``
            details: Optional structured context
        """
        super().__init__(message, details)
        self.validation_errors = validation_errors or []

    @property
    def fields(self) -> list[str]:
        """Dotted paths of the settings that failed validation."""
        return [
            ".".join(str(part) for part in error.get("loc", ()))
            for error in self.validation_errors
            if isinstance(error, dict)
        ]
