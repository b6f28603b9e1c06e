"""Build-package pipeline: tag classification, reconciliation and dispatch."""

from .interfaces import BuildPackageResult, ClassifiedTags
from .job_dispatcher import JobDispatcher
from .orchestrator import PackageBuildOrchestrator
from .release_reconciler import ReleaseReconciler
from .tag_classifier import (
    PRIORITY_TAG_PATTERN,
    TagPattern,
    apply_min_version,
    classify_tags,
    filter_remote_tags,
    get_invalid_tags,
    is_priority_tag,
)

__all__ = [
    "BuildPackageResult",
    "ClassifiedTags",
    "JobDispatcher",
    "PRIORITY_TAG_PATTERN",
    "PackageBuildOrchestrator",
    "ReleaseReconciler",
    "TagPattern",
    "apply_min_version",
    "classify_tags",
    "filter_remote_tags",
    "get_invalid_tags",
    "is_priority_tag",
]
