"""Data transfer objects shared by the build-package pipeline stages."""

from dataclasses import dataclass, field

from release_sync.git.models import RemoteTag
from release_sync.models import Release
from release_sync.queue.models import JobSpec


@dataclass
class ClassifiedTags:
    """Remote tags split into release candidates and reportable rejects."""

    valid_tags: list[RemoteTag]  # oldest version first
    invalid_tags: list[RemoteTag]


@dataclass
class BuildPackageResult:
    """Outcome of one build-package run."""

    package_name: str
    repo_unavailable: bool = False
    valid_tags: list[RemoteTag] = field(default_factory=list)
    invalid_tags: list[RemoteTag] = field(default_factory=list)
    releases: list[Release] = field(default_factory=list)
    jobs: list[JobSpec] = field(default_factory=list)

    @property
    def jobs_enqueued(self) -> int:
        return len(self.jobs)


__all__ = ["BuildPackageResult", "ClassifiedTags", "RemoteTag"]
