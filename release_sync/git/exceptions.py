"""Git command exceptions."""

# stderr fragments git prints when a repository was deleted, made private
# or cannot be accessed with the available credentials.
REPOSITORY_UNAVAILABLE_SIGNATURES: tuple[str, ...] = (
    "ERROR: Repository not found",
    "fatal: Could not read from remote repository",
    "remote: Repository not found",
    "terminal prompts disabled",
)


class GitError(Exception):
    """Base exception for git errors."""

    pass


class GitCommandError(GitError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        """Initialize git command error.

        Args:
            message: Error message
            returncode: Exit status of the git process
            stderr: Captured standard error output
        """
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class GitTimeoutError(GitError):
    """Raised when a git command does not finish in time."""

    pass


def is_repository_unavailable(error: BaseException) -> bool:
    """Check if an error means the remote repository is gone or inaccessible."""
    if not isinstance(error, GitCommandError):
        return False
    text = f"{error}\n{error.stderr}"
    return any(signature in text for signature in REPOSITORY_UNAVAILABLE_SIGNATURES)
