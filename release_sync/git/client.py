"""Git client for listing remote tags.

All git operations go through this client so the pipeline can be tested
with a mock in its place.
"""

import asyncio
import logging
import os

from .exceptions import GitCommandError, GitTimeoutError
from .models import RemoteTag

logger = logging.getLogger(__name__)

_TAG_REF_PREFIX = "refs/tags/"
_PEELED_SUFFIX = "^{}"


class GitClient:
    """Runs git commands in a subprocess.

    Example:
        client = GitClient()
        tags = await client.list_remote_tags("git@github.com:owner/repo.git")
    """

    def __init__(self, executable: str = "git", timeout: int = 60):
        """Initialize GitClient.

        Args:
            executable: Git executable to run
            timeout: Command timeout in seconds
        """
        self.executable = executable
        self.timeout = timeout

    async def _run(self, *args: str) -> str:
        """Run a git command and return its standard output.

        Raises:
            GitCommandError: If git exits with a non-zero status
            GitTimeoutError: If git does not finish within the timeout
        """
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        process = await asyncio.create_subprocess_exec(
            self.executable,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except TimeoutError as e:
            raise GitTimeoutError(
                f"git {args[0]} timed out after {self.timeout}s"
            ) from e
        finally:
            # Also reached on cancellation
            if process.returncode is None:
                process.kill()
                await process.wait()

        err = stderr.decode("utf-8", errors="replace").strip()
        if process.returncode != 0:
            raise GitCommandError(
                f"git {args[0]} failed with exit code {process.returncode}: {err}",
                returncode=process.returncode,
                stderr=err,
            )
        return stdout.decode("utf-8", errors="replace")

    async def list_remote_tags(self, remote_url: str) -> list[RemoteTag]:
        """List tags of a remote repository, newest version first.

        Annotated tags are resolved to the commit they point to.
        """
        output = await self._run(
            "ls-remote", "--tags", "--sort=-v:refname", remote_url
        )
        tags = parse_ls_remote_tags(output)
        logger.debug(
            "Listed remote tags", extra={"remote": remote_url, "count": len(tags)}
        )
        return tags


def parse_ls_remote_tags(output: str) -> list[RemoteTag]:
    """Parse ``git ls-remote --tags`` output, keeping first-seen order."""
    commits: dict[str, str] = {}
    peeled: set[str] = set()

    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        commit, _, ref = line.partition("\t")
        if not ref.startswith(_TAG_REF_PREFIX):
            continue
        name = ref[len(_TAG_REF_PREFIX) :]
        if name.endswith(_PEELED_SUFFIX):
            name = name[: -len(_PEELED_SUFFIX)]
            commits[name] = commit
            peeled.add(name)
        elif name not in peeled:
            commits.setdefault(name, commit)

    return [RemoteTag(tag=name, commit=commit) for name, commit in commits.items()]
