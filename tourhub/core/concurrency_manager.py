"""
Per-user serialization of favorite mutations.

Toggle, add, remove and reorder for the same user run one at a time inside a
process so a rapid toggle followed by a reorder cannot interleave their
read-modify-write cycles. Different users never wait on each other.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

logger = logging.getLogger(__name__)


class UserLockRegistry:
    """
    Keyed asyncio locks created on demand and dropped once nobody holds or
    waits for them.
    """

    def __init__(self):
        self._locks: Dict[Any, asyncio.Lock] = {}
        self._holders: Dict[Any, int] = {}

    @asynccontextmanager
    async def hold(self, key: Any) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._holders[key] = self._holders.get(key, 0) + 1

        if lock.locked():
            logger.debug(f"Waiting for favorites lock of user {key}", extra={"lock_key": str(key)})

        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                self._locks.pop(key, None)

    def active_keys(self) -> int:
        """Number of keys currently held or awaited."""
        return len(self._locks)


# Process-wide registry used by the GraphQL mutations
user_locks = UserLockRegistry()
