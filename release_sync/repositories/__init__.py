"""Repository implementations for data access layer."""

from .base import BaseRepository
from .package_extra import PackageExtraRepository
from .release import ReleaseRepository

__all__ = [
    "BaseRepository",
    "ReleaseRepository",
    "PackageExtraRepository",
]
