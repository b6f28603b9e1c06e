"""Package manifest loading.

Each package is described by ``<data_dir>/<name>.yml``. Only the fields the
build pipeline needs are modelled; other manifest keys are ignored.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import PackageManifestError, PackageNotFoundError

logger = logging.getLogger(__name__)

_PACKAGE_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9._-]*$", re.IGNORECASE)


class PackagePolicy(BaseModel):
    """Tag selection policy and repository location of one package."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str = Field(description="Package name")

    repo_url: str = Field(alias="repoUrl", description="Remote git repository URL")

    git_tag_prefix: str | None = Field(
        default=None,
        alias="gitTagPrefix",
        description="Literal prefix required on release tags",
    )

    git_tag_ignore: str | None = Field(
        default=None,
        alias="gitTagIgnore",
        description="Case-insensitive regular expression of tags to ignore",
    )

    min_version: str | None = Field(
        default=None,
        alias="minVersion",
        description="Inclusive lower bound on tag versions",
    )

    @field_validator("git_tag_prefix", "git_tag_ignore", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        """Treat empty strings as unset."""
        if isinstance(v, str) and v == "":
            return None
        return v

    @field_validator("git_tag_ignore")
    @classmethod
    def validate_ignore_pattern(cls, v: str | None) -> str | None:
        """Validate the ignore pattern compiles."""
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"Invalid gitTagIgnore pattern: {e}") from e
        return v

    @field_validator("min_version", mode="before")
    @classmethod
    def strip_min_version(cls, v: Any) -> Any:
        """Strip surrounding whitespace; blank means unset."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class PackageLoader:
    """Loads package policies from the manifest directory."""

    def __init__(self, data_dir: str | Path):
        """Initialize loader.

        Args:
            data_dir: Directory holding one ``<name>.yml`` file per package
        """
        self.data_dir = Path(data_dir)

    def manifest_path(self, name: str) -> Path:
        """Return the manifest path of a package."""
        if not _PACKAGE_NAME_RE.match(name):
            raise PackageNotFoundError(f"Invalid package name: {name!r}", name)
        return self.data_dir / f"{name}.yml"

    def load(self, name: str) -> PackagePolicy:
        """Load and validate the manifest of a package.

        Raises:
            PackageNotFoundError: If the manifest does not exist
            PackageManifestError: If the manifest is malformed
        """
        path = self.manifest_path(name)
        if not path.is_file():
            raise PackageNotFoundError(f"Package manifest not found: {path}", name)

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PackageManifestError(
                f"Failed to parse package manifest {path}: {e}", name
            ) from e

        if not isinstance(data, dict):
            raise PackageManifestError(
                f"Package manifest {path} must contain a mapping", name
            )

        data.setdefault("name", name)
        try:
            policy = PackagePolicy.model_validate(data)
        except ValidationError as e:
            raise PackageManifestError(
                f"Invalid package manifest {path}: {e}", name
            ) from e

        logger.debug("Loaded package manifest", extra={"pkg": name})
        return policy
