"""Build-package orchestration.

Runs the pipeline for one package: load the manifest, list remote tags,
classify them, reconcile releases and dispatch build jobs.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from release_sync.git.client import GitClient
from release_sync.git.exceptions import GitCommandError, is_repository_unavailable
from release_sync.git.models import RemoteTag
from release_sync.packages.manifest import PackageLoader
from release_sync.packages.urls import clean_repo_url
from release_sync.repositories.package_extra import PackageExtraRepository

from .interfaces import BuildPackageResult
from .job_dispatcher import JobDispatcher
from .release_reconciler import ReleaseReconciler
from .tag_classifier import classify_tags

logger = logging.getLogger(__name__)


class PackageBuildOrchestrator:
    """Sequences fetch, classify, reconcile and dispatch for a package."""

    def __init__(
        self,
        session: AsyncSession,
        package_loader: PackageLoader,
        git_client: GitClient,
        package_extra_repository: PackageExtraRepository,
        reconciler: ReleaseReconciler,
        dispatcher: JobDispatcher,
    ):
        self.session = session
        self.package_loader = package_loader
        self.git_client = git_client
        self.package_extra_repository = package_extra_repository
        self.reconciler = reconciler
        self.dispatcher = dispatcher

    async def _fetch_remote_tags(self, name: str, repo_url: str) -> list[RemoteTag] | None:
        """List remote tags and record repository availability.

        Returns None when the repository is gone or inaccessible.
        """
        try:
            remote_tags = await self.git_client.list_remote_tags(
                clean_repo_url(repo_url, "git")
            )
        except GitCommandError as e:
            if not is_repository_unavailable(e):
                raise
            logger.warning(
                "repository unavailable", extra={"pkg": name, "error": str(e)}
            )
            await self.package_extra_repository.set_repo_unavailable(name, True)
            await self.session.commit()
            return None

        await self.package_extra_repository.set_repo_unavailable(name, False)
        return remote_tags

    async def build_package(self, name: str) -> BuildPackageResult:
        """Synchronize the releases of a package and queue their builds."""
        result = BuildPackageResult(package_name=name)

        logger.debug("load package manifest", extra={"pkg": name})
        policy = self.package_loader.load(name)

        logger.debug("get remote tags", extra={"pkg": name})
        remote_tags = await self._fetch_remote_tags(name, policy.repo_url)
        if remote_tags is None:
            result.repo_unavailable = True
            return result

        classified = classify_tags(remote_tags, policy)
        result.valid_tags = classified.valid_tags
        result.invalid_tags = classified.invalid_tags
        await self.package_extra_repository.set_invalid_tags(
            name, [x.to_dict() for x in classified.invalid_tags]
        )
        await self.session.commit()

        if not classified.valid_tags:
            logger.info("no valid tags found", extra={"pkg": name})
            return result

        logger.debug("update release records", extra={"pkg": name})
        result.releases = await self.reconciler.reconcile(name, classified.valid_tags)
        await self.session.commit()

        logger.debug("add release jobs", extra={"pkg": name})
        result.jobs = await self.dispatcher.dispatch(result.releases)
        return result
