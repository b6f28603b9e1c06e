"""Semantic version parsing for git tags.

Tags carry versions in package-specific spellings (``v1.2.3``,
``upm/1.2.3``, ``release-1.2.3-upm``). ``get_version_from_tag`` reduces all
of them to a normalised ``MAJOR.MINOR.PATCH[-PRERELEASE]`` string.
"""

import re
from dataclasses import dataclass
from functools import total_ordering

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

# Leading label before the version number, e.g. "v", "V", "release-", "ver_"
_TAG_LABEL_RE = re.compile(r"^[a-zA-Z][a-zA-Z_-]*?(?=\d)|^=")
_UPM_SUFFIX_RE = re.compile(r"[_-]upm$", re.IGNORECASE)


@total_ordering
@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{core}-{'.'.join(self.prerelease)}"
        return core

    def _precedence_key(self) -> tuple:
        # A version without prerelease ranks above any of its prereleases;
        # numeric identifiers rank below alphanumeric ones.
        pre = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return (self.major, self.minor, self.patch, not self.prerelease, pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()


def parse_version(text: str) -> SemVer | None:
    """Parse a strict semantic version, ignoring build metadata."""
    m = _SEMVER_RE.match(text)
    if m is None:
        return None
    prerelease = tuple(m.group(4).split(".")) if m.group(4) else ()
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), prerelease)


def parse_tag_version(tag: str) -> SemVer | None:
    """Parse the semantic version carried by a git tag name."""
    name = tag.strip().rsplit("/", 1)[-1]
    name = _UPM_SUFFIX_RE.sub("", name)
    name = _TAG_LABEL_RE.sub("", name, count=1)
    return parse_version(name)


def get_version_from_tag(tag: str) -> str | None:
    """Return the normalised version of a git tag, or None if not version-like."""
    version = parse_tag_version(tag)
    return str(version) if version is not None else None

