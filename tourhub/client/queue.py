"""Single-flight execution of favorites mutations."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MutationQueue:
    """
    Runs submitted coroutines one at a time in arrival order.

    asyncio.Lock wakes waiters FIFO, so a toggle queued before a reorder is
    always sent to the server first.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._pending = 0

    @property
    def pending(self) -> int:
        """Operations running or waiting."""
        return self._pending

    async def run(self, operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        self._pending += 1
        try:
            if self._lock.locked():
                logger.debug(f"Queued {getattr(operation, '__name__', operation)} behind {self._pending - 1} operation(s)")
            async with self._lock:
                return await operation(*args, **kwargs)
        finally:
            self._pending -= 1
