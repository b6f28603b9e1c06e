"""Build job dispatch.

Enqueues one build job per release that still needs building. Job ids are
deterministic so dispatching the same release twice leaves a single live
job, and start times are staggered by a fixed interval.
"""

import logging
from collections.abc import Iterable

from release_sync.config.models import JobConfig
from release_sync.models import Release, ReleaseReason
from release_sync.queue.base import JobQueue
from release_sync.queue.models import JobSpec, make_job_id

logger = logging.getLogger(__name__)


class JobDispatcher:
    """Enqueues build-release jobs for releases that require work."""

    def __init__(
        self,
        queue: JobQueue,
        job_config: JobConfig,
        retryable_reasons: Iterable[ReleaseReason] | None = None,
    ):
        """Initialize dispatcher.

        Args:
            queue: Queue jobs are added to
            job_config: Name, interval and timeout of the build-release job
            retryable_reasons: Failure reasons that allow a rebuild; defaults to
                ``job_config.retryable_reasons``
        """
        self.queue = queue
        self.job_config = job_config
        self.retryable_reasons = frozenset(
            job_config.retryable_reasons
            if retryable_reasons is None
            else retryable_reasons
        )

    def should_dispatch(self, release: Release) -> bool:
        """Check if a release still needs a build job."""
        if release.is_succeeded:
            return False
        if release.is_failed:
            return release.reason in self.retryable_reasons
        return True

    def build_job(self, release: Release, slot: int) -> JobSpec:
        """Describe the build job of a release started ``slot`` intervals late."""
        return JobSpec(
            id=make_job_id(self.job_config.name, release.package_name, release.version),
            name=self.job_config.name,
            payload={"package_name": release.package_name, "version": release.version},
            delay=self.job_config.interval * slot,
            timeout=self.job_config.timeout,
        )

    async def dispatch(self, releases: Iterable[Release]) -> list[JobSpec]:
        """Enqueue build jobs in release order and return them."""
        jobs: list[JobSpec] = []
        for release in releases:
            if not self.should_dispatch(release):
                continue
            job = self.build_job(release, slot=len(jobs))
            await self.queue.enqueue(job)
            jobs.append(job)

        if jobs:
            logger.info(
                "Added build release jobs",
                extra={"count": len(jobs), "job_name": self.job_config.name},
            )
        return jobs
