"""Git access for listing remote release tags."""

from .client import GitClient, parse_ls_remote_tags
from .exceptions import (
    REPOSITORY_UNAVAILABLE_SIGNATURES,
    GitCommandError,
    GitError,
    GitTimeoutError,
    is_repository_unavailable,
)
from .models import RemoteTag

__all__ = [
    "GitClient",
    "GitCommandError",
    "GitError",
    "GitTimeoutError",
    "REPOSITORY_UNAVAILABLE_SIGNATURES",
    "RemoteTag",
    "is_repository_unavailable",
    "parse_ls_remote_tags",
]
