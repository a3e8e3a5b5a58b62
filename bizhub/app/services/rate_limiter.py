"""
Rate Limiting

Fixed-window request counting over an injected store. The store decides the
sharing scope: ``InMemoryRateLimitStore`` is process-local and resets on
restart; the Redis store (adapter layer) is shared across instances.
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Tuple


class RateLimitStoreError(Exception):
    """Raised by a store whose backend cannot be reached"""


class RateLimitStore(ABC):
    @abstractmethod
    async def increment(self, key: str, window_seconds: int) -> int:
        """Count one hit for ``key`` and return the hits in the current window"""
        pass

    async def close(self) -> None:
        """Release backend connections; called on application shutdown"""
        pass


class InMemoryRateLimitStore(RateLimitStore):
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._windows: Dict[str, Tuple[int, float]] = {}

    async def increment(self, key: str, window_seconds: int) -> int:
        now = self._clock()
        hits, reset_at = self._windows.get(key, (0, 0.0))
        if now >= reset_at:
            hits, reset_at = 0, now + window_seconds
        hits += 1
        self._windows[key] = (hits, reset_at)
        return hits


class RateLimiter:
    def __init__(self, store: RateLimitStore, limit: int, window_seconds: int):
        self.store = store
        self.limit = limit
        self.window_seconds = window_seconds

    async def allow(self, key: str) -> bool:
        hits = await self.store.increment(key, self.window_seconds)
        return hits <= self.limit
