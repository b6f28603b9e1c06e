"""Abstract job queue interface."""

from abc import ABC, abstractmethod

from .models import JobSpec


class JobQueue(ABC):
    """Abstract base class for job queue implementations.

    Implementations keep at most one live job per ``JobSpec.id``.
    """

    @abstractmethod
    async def enqueue(self, job: JobSpec) -> bool:
        """Add a job. Returns False if a job with the same id is already live."""
        pass

    async def close(self) -> None:
        """Release connections held by the queue."""
        return None
