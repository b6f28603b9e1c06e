"""Enums for database models."""

import enum


class ReleaseState(str, enum.Enum):
    """Release build state enum."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ReleaseReason(str, enum.Enum):
    """Cause recorded on a release, meaningful when the release failed."""

    NONE = "none"
    VERSION_CONFLICT = "version_conflict"
    INTERNAL = "internal"
    BAD_GATEWAY = "bad_gateway"
    SERVICE_UNAVAILABLE = "service_unavailable"
    GATEWAY_TIMEOUT = "gateway_timeout"
    PACKAGE_NOT_FOUND = "package_not_found"
    PACKAGE_NAME_NOT_MATCH = "package_name_not_match"
    PACKAGE_VERSION_NOT_MATCH = "package_version_not_match"
    PACKAGE_INVALID_JSON = "package_invalid_json"
    REMOTE_REPOSITORY_UNAVAILABLE = "remote_repository_unavailable"
    BUILD_TIMEOUT = "build_timeout"


# Failures caused by infrastructure rather than the package itself.
RETRYABLE_RELEASE_REASONS: frozenset[ReleaseReason] = frozenset(
    {
        ReleaseReason.INTERNAL,
        ReleaseReason.BAD_GATEWAY,
        ReleaseReason.SERVICE_UNAVAILABLE,
        ReleaseReason.GATEWAY_TIMEOUT,
        ReleaseReason.BUILD_TIMEOUT,
    }
)
