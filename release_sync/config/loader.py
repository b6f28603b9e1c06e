"""Configuration loading.

Values come from, lowest precedence first: model defaults, the YAML
configuration file, and ``${VAR}`` references inside that file resolved
from the environment. The file is taken from ``--config`` when given and
otherwise searched for in, in order: the working directory, the path in
``RELEASE_SYNC_CONFIG_PATH``, ``~/.release-sync/`` and ``/etc/release-sync/``.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    ConfigurationValidationError,
)
from .models import Config

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "RELEASE_SYNC_CONFIG_PATH"
DEFAULT_CONFIG_FILENAME = "config.yaml"


def _read_yaml_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML file that must hold a mapping; an empty file is ``{}``."""
    if not path.is_file():
        raise ConfigurationFileError(
            f"Configuration file not found: {path}", file_path=str(path)
        )

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationFileError(
            f"Failed to parse YAML configuration: {e}", file_path=str(path)
        ) from e
    except OSError as e:
        raise ConfigurationFileError(
            f"Failed to read configuration file: {e}", file_path=str(path)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationFileError(
            "Configuration file must contain a mapping at the top level",
            file_path=str(path),
        )
    return data


class ConfigurationLoader:
    """Finds, reads and validates configuration files."""

    def load_from_file(self, config_path: str | Path) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigurationFileError: If the file cannot be read or parsed
            ConfigurationValidationError: If a value is invalid
        """
        path = Path(config_path)
        config = self.load_from_dict(_read_yaml_mapping(path))
        logger.debug("Loaded configuration", extra={"path": str(path.resolve())})
        return config

    def load_from_dict(self, config_data: dict[str, Any]) -> Config:
        """Validate already parsed configuration data."""
        try:
            return Config(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(
                f"Configuration validation failed: {e}",
                validation_errors=e.errors(),
            ) from e

    def find_config_file(self, filename: str = DEFAULT_CONFIG_FILENAME) -> Path | None:
        """Return the first existing configuration file in the search path."""
        candidates = [Path.cwd() / filename]

        env_path = os.getenv(CONFIG_PATH_ENV_VAR)
        if env_path:
            path = Path(env_path)
            candidates.append(path if path.is_file() else path / filename)

        candidates.append(Path.home() / ".release-sync" / filename)
        candidates.append(Path("/etc/release-sync") / filename)

        return next((path for path in candidates if path.is_file()), None)

    def auto_load(self, filename: str = DEFAULT_CONFIG_FILENAME) -> Config:
        """Load the first configuration file found, or defaults if there is none."""
        path = self.find_config_file(filename)
        if path is None:
            logger.debug("No configuration file found, using defaults")
            return self.load_from_dict({})
        return self.load_from_file(path)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from an explicit file or by searching for one.

    Raises:
        ConfigurationError: If configuration cannot be loaded or is invalid
    """
    loader = ConfigurationLoader()
    try:
        if config_path:
            return loader.load_from_file(config_path)
        return loader.auto_load()
    except ConfigurationFileError as e:
        raise ConfigurationError(
            f"Failed to load configuration: {e}", details={"file_path": e.file_path}
        ) from e
    except ConfigurationValidationError as e:
        raise ConfigurationError(
            f"Failed to load configuration: {e}", details={"fields": e.fields}
        ) from e
