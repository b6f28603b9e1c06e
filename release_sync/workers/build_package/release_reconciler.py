"""Release reconciliation.

Brings the persisted releases of a package in line with its valid remote
tags: failed releases whose tag disappeared or was moved are removed, and a
pending release is created for every tag without one.
"""

import logging

from release_sync.git.models import RemoteTag
from release_sync.models import Release
from release_sync.packages.semver import get_version_from_tag
from release_sync.repositories.release import ReleaseRepository

logger = logging.getLogger(__name__)


class ReleaseReconciler:
    """Merges valid remote tags into the stored releases of a package."""

    def __init__(self, release_repository: ReleaseRepository):
        """Initialize reconciler.

        Args:
            release_repository: Repository used to read, create and delete releases
        """
        self.release_repository = release_repository

    async def prune_stale_failures(
        self, package_name: str, valid_tags: list[RemoteTag]
    ) -> list[Release]:
        """Remove failed releases whose tag and commit are no longer listed.

        This happens when the remote tag was deleted or re-tagged to another
        commit; the old failure must not block a new build of the version.
        """
        removed = []

        for release in await self.release_repository.fetch_all(package_name):
            if not release.is_failed or any(
                release.matches_tag(x.tag, x.commit) for x in valid_tags
            ):
                continue
            logger.warning(
                "remove failed release that not listed in remote tags",
                extra={
                    "pkg": package_name,
                    "rel": release.key,
                    "tag": release.tag,
                    "commit": release.commit,
                },
            )
            await self.release_repository.remove_release(package_name, release.version)
            removed.append(release)

        return removed

    async def materialize(
        self, package_name: str, valid_tags: list[RemoteTag]
    ) -> list[Release]:
        """Return the release of every valid tag, creating missing ones.

        Existing releases are returned as stored, even if their commit no
        longer matches the tag.
        """
        releases = []
        for remote_tag in valid_tags:
            version = get_version_from_tag(remote_tag.tag)
            if version is None:
                raise ValueError(f"Tag {remote_tag.tag!r} has no version")

            release = await self.release_repository.fetch_one(package_name, version)
            if release is None:
                release = await self.release_repository.create_release(
                    package_name=package_name,
                    version=version,
                    commit=remote_tag.commit,
                    tag=remote_tag.tag,
                )
                logger.info(
                    "Created release",
                    extra={"pkg": package_name, "rel": release.key, "tag": remote_tag.tag},
                )
            releases.append(release)

        return releases

    async def reconcile(
        self, package_name: str, valid_tags: list[RemoteTag]
    ) -> list[Release]:
        """Prune stale failed releases, then materialize releases for valid tags."""
        await self.prune_stale_failures(package_name, valid_tags)
        return await self.materialize(package_name, valid_tags)
