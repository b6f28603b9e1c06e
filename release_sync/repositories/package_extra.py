"""PackageExtra repository for per-package side records."""

from sqlalchemy.ext.asyncio import AsyncSession

from release_sync.models import PackageExtra

from .base import BaseRepository


class PackageExtraRepository(BaseRepository[PackageExtra]):
    """Repository for PackageExtra operations."""

    def __init__(self, session: AsyncSession):
        """Initialize with session."""
        super().__init__(session, PackageExtra)

    async def get_by_package_name(self, package_name: str) -> PackageExtra | None:
        """Get the side record of a package."""
        return await self.find_one(PackageExtra.package_name == package_name)

    async def get_or_create(self, package_name: str) -> PackageExtra:
        """Get the side record of a package, creating an empty one if missing."""
        extra = await self.get_by_package_name(package_name)
        if extra is None:
            extra = await self.create(
                package_name=package_name, repo_unavailable=False, invalid_tags=[]
            )
        return extra

    async def set_repo_unavailable(
        self, package_name: str, unavailable: bool
    ) -> PackageExtra:
        """Overwrite the repository availability flag."""
        extra = await self.get_or_create(package_name)
        return await self.update(extra, repo_unavailable=unavailable)

    async def set_invalid_tags(
        self, package_name: str, invalid_tags: list[dict[str, str]]
    ) -> PackageExtra:
        """Overwrite the list of invalid tags."""
        extra = await self.get_or_create(package_name)
        return await self.update(extra, invalid_tags=list(invalid_tags))
