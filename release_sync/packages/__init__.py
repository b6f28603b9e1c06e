"""Package manifests, versions and repository URLs."""

from .exceptions import PackageError, PackageManifestError, PackageNotFoundError
from .manifest import PackageLoader, PackagePolicy
from .semver import SemVer, get_version_from_tag, parse_tag_version
from .urls import clean_repo_url

__all__ = [
    "PackageError",
    "PackageLoader",
    "PackageManifestError",
    "PackageNotFoundError",
    "PackagePolicy",
    "SemVer",
    "clean_repo_url",
    "get_version_from_tag",
    "parse_tag_version",
]
