"""Job descriptors handed to the job queue."""

from dataclasses import dataclass, field
from typing import Any


def make_job_id(job_name: str, package_name: str, version: str) -> str:
    """Build the job id that makes enqueueing a release idempotent."""
    return f"{job_name}:{package_name}:{version}"


@dataclass(frozen=True)
class JobSpec:
    """A job to be added to a queue.

    ``delay`` and ``timeout`` are whole seconds.
    """

    id: str
    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    delay: int = 0
    timeout: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "payload": dict(self.payload),
            "delay": self.delay,
            "timeout": self.timeout,
        }
