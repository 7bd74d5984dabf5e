"""
Per-key mutual exclusion for read-modify-write operations.

Writers on the same tool (or the same scrap bucket) must not interleave;
writers on different keys run in parallel. Entries are dropped once no
coroutine holds or waits on them, so the registry only ever contains the
keys currently in use.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Tuple


class KeyedLock:
    """Registry of asyncio locks addressed by string keys."""

    def __init__(self) -> None:
        # key -> (lock, number of holders + waiters)
        self._locks: Dict[str, Tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock, users = self._locks.get(key, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[key]
            if users <= 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, users - 1)

    def __contains__(self, key: str) -> bool:
        return key in self._locks

    def __len__(self) -> int:
        return len(self._locks)


# Process-wide registries shared by every request
tool_locks = KeyedLock()
scrap_locks = KeyedLock()
