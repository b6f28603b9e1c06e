"""Redis job queue implementation."""

import json
import logging
import time
from typing import Any

import redis.asyncio as redis
from redis.exceptions import WatchError

from .base import JobQueue
from .models import JobSpec

logger = logging.getLogger(__name__)


class RedisJobQueue(JobQueue):
    """Redis-backed queue with delayed jobs and idempotent job ids.

    A job id is live while it is in the wait list or the delayed set.

    Keys, for queue ``q`` and prefix ``p``:
    - ``p:q:<job id>``: job record (JSON) of the last enqueue of that id
    - ``p:q:wait``: list of job ids ready to run
    - ``p:q:delayed``: sorted set of job ids scored by due time (epoch ms)
    """

    def __init__(
        self,
        queue_name: str,
        url: str = "redis://localhost:6379/0",
        key_prefix: str = "release-sync",
        client: Any | None = None,
    ):
        """Initialize Redis queue.

        Args:
            queue_name: Name of the queue jobs are added to
            url: Redis connection URL
            key_prefix: Prefix for all queue keys
            client: Existing redis client to use instead of connecting to url
        """
        self.queue_name = queue_name
        self.url = url
        self.key_prefix = key_prefix
        self._client = client

    def _get_client(self) -> Any:
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(self.url, decode_responses=True)
        return self._client

    def _make_key(self, suffix: str) -> str:
        return f"{self.key_prefix}:{self.queue_name}:{suffix}"

    def job_key(self, job_id: str) -> str:
        """Return the key holding a job record."""
        return self._make_key(job_id)

    @property
    def wait_key(self) -> str:
        return self._make_key("wait")

    @property
    def delayed_key(self) -> str:
        return self._make_key("delayed")

    async def enqueue(self, job: JobSpec) -> bool:
        """Add a job unless a job with the same id is still waiting or delayed.

        The record and the scheduling entry are written in one transaction.
        A job popped by a worker is no longer live, so its id can be queued
        again and the stored record is replaced.
        """
        async with self._get_client().pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(self.wait_key, self.delayed_key)
                    if await self._is_live(pipe, job.id):
                        logger.debug("Job already queued", extra={"job_id": job.id})
                        return False

                    now_ms = int(time.time() * 1000)
                    record = {**job.to_dict(), "queue": self.queue_name, "timestamp": now_ms}
                    pipe.multi()
                    pipe.set(self.job_key(job.id), json.dumps(record))
                    if job.delay > 0:
                        pipe.zadd(self.delayed_key, {job.id: now_ms + job.delay * 1000})
                    else:
                        pipe.rpush(self.wait_key, job.id)
                    await pipe.execute()
                    break
                except WatchError:
                    logger.debug("Queue changed during enqueue, retrying", extra={"job_id": job.id})

        logger.debug(
            "Job queued",
            extra={"job_id": job.id, "queue": self.queue_name, "delay": job.delay},
        )
        return True

    async def _is_live(self, pipe: Any, job_id: str) -> bool:
        """Check whether a job id is waiting or delayed."""
        if await pipe.zscore(self.delayed_key, job_id) is not None:
            return True
        return await pipe.lpos(self.wait_key, job_id) is not None

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
