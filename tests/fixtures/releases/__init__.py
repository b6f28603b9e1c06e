"""
Test factories for the build-package pipeline.

Provides factories for remote tags, releases, package policies and job
configuration, a recording in-memory job queue and an in-memory Redis client.
"""

from .factories import (
    JobConfigFactory,
    PackagePolicyFactory,
    RecordingJobQueue,
    ReleaseFactory,
    RemoteTagFactory,
)
from .fake_redis import FakeRedis

__all__ = [
    "FakeRedis",
    "JobConfigFactory",
    "PackagePolicyFactory",
    "RecordingJobQueue",
    "ReleaseFactory",
    "RemoteTagFactory",
]
