"""Repository URL normalisation."""

import re
from typing import Literal

UrlFormat = Literal["https", "git"]

_HTTP_URL_RE = re.compile(
    r"^(?:https?|git)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<path>.+?)(?:\.git)?/?$",
    re.IGNORECASE,
)
_SSH_URL_RE = re.compile(
    r"^(?:ssh://)?(?P<user>[^@/]+)@(?P<host>[^/:]+)[:/](?P<path>.+?)(?:\.git)?/?$",
    re.IGNORECASE,
)


def clean_repo_url(url: str, fmt: UrlFormat = "https") -> str:
    """Normalise a repository URL.

    ``fmt="https"`` gives ``https://host/owner/repo``; ``fmt="git"`` gives
    ``git@host:owner/repo.git``.

    Raises:
        ValueError: If the URL is not a recognisable repository URL
    """
    url = url.strip()
    m = _HTTP_URL_RE.match(url) or _SSH_URL_RE.match(url)
    if m is None:
        raise ValueError(f"Unrecognised repository URL: {url!r}")

    host = m.group("host").lower()
    path = m.group("path").strip("/")

    if fmt == "https":
        return f"https://{host}/{path}"
    elif fmt == "git":
        return f"git@{host}:{path}.git"
    raise ValueError(f"Unsupported URL format: {fmt!r}")
