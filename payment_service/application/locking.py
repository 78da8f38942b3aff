"""
In-process single-flight locking keyed by payment id.

Concurrent status checks on the same payment would otherwise both call
the provider and both write. Holding a per-id lock serializes them so
the second caller sees the first caller's result.

Only coordinates coroutines in one process; separate workers still race
with last-write-wins.
"""
import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Dict

import structlog

logger = structlog.get_logger(__name__)


class KeyedLock:
    """asyncio.Lock per key, dropped once no coroutine holds or waits on it."""

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._waiters: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1

        if lock.locked():
            logger.debug("keyed_lock_contended", key=key)

        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
