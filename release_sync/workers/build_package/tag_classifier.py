"""Tag classification.

Turns the raw tag list of a remote repository into release candidates:
filtered by the package policy, deduplicated by version with priority tags
winning, and ordered oldest first.
"""

import re
from collections.abc import Iterable

from release_sync.git.models import RemoteTag
from release_sync.packages.manifest import PackagePolicy
from release_sync.packages.semver import get_version_from_tag, parse_tag_version

from .interfaces import ClassifiedTags


class TagPattern:
    """Case-insensitive regular expression matched anywhere in a tag."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex = re.compile(pattern, re.IGNORECASE)

    def matches(self, tag: str) -> bool:
        return self._regex.search(tag) is not None

    def __repr__(self) -> str:
        return f"TagPattern({self.pattern!r})"


# Tags prefixed with "upm/" or suffixed with "-upm"/"_upm" win version conflicts
PRIORITY_TAG_PATTERN = TagPattern(r"(^upm/|[_-]upm$)")


def is_priority_tag(tag: str) -> bool:
    """Check if a tag carries the priority marker."""
    return PRIORITY_TAG_PATTERN.matches(tag)


def apply_min_version(
    tags: Iterable[RemoteTag], min_version: str
) -> list[RemoteTag] | None:
    """Keep tags whose version is at least ``min_version``.

    Returns None, meaning the floor is not applied, when ``min_version`` or
    any of the tags has no parseable version.
    """
    floor = parse_tag_version(min_version)
    if floor is None:
        return None

    kept = []
    for remote_tag in tags:
        version = parse_tag_version(remote_tag.tag)
        if version is None:
            return None
        if version >= floor:
            kept.append(remote_tag)
    return kept


def _filter_by_policy(
    tags: list[RemoteTag],
    git_tag_prefix: str | None,
    git_tag_ignore: str | None,
    require_version: bool,
) -> list[RemoteTag]:
    if git_tag_prefix:
        tags = [x for x in tags if x.tag.startswith(git_tag_prefix)]
    if require_version:
        tags = [x for x in tags if get_version_from_tag(x.tag) is not None]
    if git_tag_ignore:
        ignore = TagPattern(git_tag_ignore)
        tags = [x for x in tags if not ignore.matches(x.tag)]
    return tags


def _apply_floor(tags: list[RemoteTag], min_version: str | None) -> list[RemoteTag]:
    if not min_version:
        return tags
    floored = apply_min_version(tags, min_version)
    return tags if floored is None else floored


def filter_remote_tags(
    remote_tags: list[RemoteTag],
    git_tag_prefix: str | None = None,
    git_tag_ignore: str | None = None,
    min_version: str | None = None,
) -> list[RemoteTag]:
    """Filter tags for prefix, non-semver, ignore pattern, floor and duplicates.

    Keeps the input order (newest first), priority tags ahead of the rest.
    """
    tags = _filter_by_policy(
        remote_tags, git_tag_prefix, git_tag_ignore, require_version=True
    )

    valid_tags: list[RemoteTag] = []
    seen_versions: set[str] = set()

    def add_unseen(candidates: list[RemoteTag]) -> None:
        for remote_tag in candidates:
            version = get_version_from_tag(remote_tag.tag)
            if version not in seen_versions:
                seen_versions.add(version)
                valid_tags.append(remote_tag)

    add_unseen([x for x in tags if is_priority_tag(x.tag)])
    # Priority tags are exempt from the floor
    add_unseen(_apply_floor([x for x in tags if not is_priority_tag(x.tag)], min_version))
    return valid_tags


def get_invalid_tags(
    remote_tags: list[RemoteTag],
    valid_tags: list[RemoteTag],
    git_tag_prefix: str | None = None,
    git_tag_ignore: str | None = None,
    min_version: str | None = None,
) -> list[RemoteTag]:
    """Return tags rejected as duplicates or non-semver.

    Tags that are ignored, lack the required prefix, or fall below the floor
    are out of scope rather than invalid and are not returned.
    """
    valid_names = {x.tag for x in valid_tags}
    tags = [x for x in remote_tags if x.tag not in valid_names]
    tags = _filter_by_policy(
        tags, git_tag_prefix, git_tag_ignore, require_version=False
    )
    return _apply_floor(tags, min_version)


def classify_tags(remote_tags: list[RemoteTag], policy: PackagePolicy) -> ClassifiedTags:
    """Split remote tags into valid tags (oldest first) and invalid tags."""
    valid_tags = filter_remote_tags(
        remote_tags,
        git_tag_prefix=policy.git_tag_prefix,
        git_tag_ignore=policy.git_tag_ignore,
        min_version=policy.min_version,
    )
    valid_tags.reverse()
    invalid_tags = get_invalid_tags(
        remote_tags,
        valid_tags,
        git_tag_prefix=policy.git_tag_prefix,
        git_tag_ignore=policy.git_tag_ignore,
        min_version=policy.min_version,
    )
    return ClassifiedTags(valid_tags=valid_tags, invalid_tags=invalid_tags)
