"""Job queue used to schedule release builds."""

from .base import JobQueue
from .models import JobSpec, make_job_id
from .redis_queue import RedisJobQueue

__all__ = ["JobQueue", "JobSpec", "RedisJobQueue", "make_job_id"]
