"""
In-memory Redis stand-in for queue tests.

Implements the strings, lists and sorted sets used by RedisJobQueue, and a
transactional pipeline that buffers commands after ``multi()`` and applies
them on ``execute()``.
"""

from collections import defaultdict
from typing import Any

from redis.exceptions import WatchError


class FakePipeline:
    """Pipeline with WATCH/MULTI/EXEC semantics over a FakeRedis."""

    def __init__(self, redis: "FakeRedis") -> None:
        self.redis = redis
        self.watched: tuple[str, ...] = ()
        self.commands: list[tuple[str, tuple[Any, ...]]] = []

    async def __aenter__(self) -> "FakePipeline":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.reset()

    async def reset(self) -> None:
        self.watched = ()
        self.commands = []

    async def watch(self, *keys: str) -> None:
        self.watched = keys

    async def zscore(self, key: str, member: str) -> float | None:
        return self.redis.zsets[key].get(member)

    async def lpos(self, key: str, value: str) -> int | None:
        items = self.redis.lists[key]
        return items.index(value) if value in items else None

    def multi(self) -> None:
        self.commands = []

    def set(self, key: str, value: str) -> "FakePipeline":
        self.commands.append(("set", (key, value)))
        return self

    def rpush(self, key: str, value: str) -> "FakePipeline":
        self.commands.append(("rpush", (key, value)))
        return self

    def zadd(self, key: str, mapping: dict[str, float]) -> "FakePipeline":
        self.commands.append(("zadd", (key, mapping)))
        return self

    async def execute(self) -> list[Any]:
        commands, self.commands = self.commands, []
        self.redis.executed += 1
        if self.redis.fail_execute is not None:
            raise self.redis.fail_execute
        if self.redis.watch_conflicts > 0:
            self.redis.watch_conflicts -= 1
            raise WatchError("Watched variable changed.")

        for name, args in commands:
            getattr(self.redis, f"_apply_{name}")(*args)
        return [True] * len(commands)


class FakeRedis:
    """Minimal in-memory Redis client for RedisJobQueue tests.

    ``watch_conflicts`` makes that many transactions fail with WatchError;
    ``fail_execute`` makes every transaction raise the given error.
    """

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.lists: defaultdict[str, list[str]] = defaultdict(list)
        self.zsets: defaultdict[str, dict[str, float]] = defaultdict(dict)
        self.watch_conflicts = 0
        self.fail_execute: Exception | None = None
        self.executed = 0
        self.closed = False

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        return FakePipeline(self)

    async def aclose(self) -> None:
        self.closed = True

    def pop_ready(self, key: str) -> str | None:
        """Take the first waiting job id, as a queue worker does."""
        items = self.lists[key]
        return items.pop(0) if items else None

    def _apply_set(self, key: str, value: str) -> None:
        self.values[key] = value

    def _apply_rpush(self, key: str, value: str) -> None:
        self.lists[key].append(value)

    def _apply_zadd(self, key: str, mapping: dict[str, float]) -> None:
        self.zsets[key].update(mapping)
