"""SQLAlchemy models for the release synchronization pipeline."""

from .base import Base, BaseModel
from .enums import RETRYABLE_RELEASE_REASONS, ReleaseReason, ReleaseState
from .package_extra import PackageExtra
from .release import Release

__all__ = [
    # Base classes
    "Base",
    "BaseModel",
    # Enums
    "ReleaseState",
    "ReleaseReason",
    "RETRYABLE_RELEASE_REASONS",
    # Core models
    "Release",
    "PackageExtra",
]
