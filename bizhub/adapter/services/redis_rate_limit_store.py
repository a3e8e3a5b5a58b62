"""
Redis-backed rate limit counters, shared by every API instance.
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from bizhub.app.services.rate_limiter import RateLimitStore, RateLimitStoreError

logger = logging.getLogger(__name__)


class RedisRateLimitStore(RateLimitStore):
    """Fixed-window counters as Redis keys expiring with their window"""

    def __init__(self, client: redis.Redis, prefix: str = "bizhub:ratelimit:"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str) -> "RedisRateLimitStore":
        client = redis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return cls(client)

    async def increment(self, key: str, window_seconds: int) -> int:
        redis_key = f"{self.prefix}{key}"
        try:
            count = await self.client.incr(redis_key)
            if count == 1:
                # First hit opens the window
                await self.client.expire(redis_key, window_seconds)
        except RedisError as e:
            logger.error(f"Redis rate limit store failed: {e}")
            raise RateLimitStoreError(str(e)) from e
        return int(count)

    async def close(self) -> None:
        await self.client.aclose()
