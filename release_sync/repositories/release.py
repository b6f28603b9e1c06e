"""Release repository for per-package release records."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from release_sync.models import Release, ReleaseState

from .base import BaseRepository

logger = logging.getLogger(__name__)


class ReleaseRepository(BaseRepository[Release]):
    """Repository for Release operations keyed by (package_name, version)."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Release)

    async def fetch_all(self, package_name: str) -> list[Release]:
        """Get every release recorded for a package, oldest first."""
        return await self.find_all(
            Release.package_name == package_name, order_by=(Release.created_at,)
        )

    async def fetch_one(self, package_name: str, version: str) -> Release | None:
        """Get the release for a package version."""
        return await self.find_one(
            Release.package_name == package_name, Release.version == version
        )

    async def create_release(
        self, package_name: str, version: str, commit: str, tag: str
    ) -> Release:
        """Create a pending release for a newly seen tag."""
        return await self.create(
            package_name=package_name,
            version=version,
            commit=commit,
            tag=tag,
            state=ReleaseState.PENDING,
        )

    async def remove_release(self, package_name: str, version: str) -> bool:
        """Delete a release. Returns True if deleted, False if not found."""
        release = await self.fetch_one(package_name, version)
        if release is None:
            return False

        await self.delete(release)
        logger.debug("Removed release", extra={"pkg": package_name, "rel": release.key})
        return True
