"""Redis cache for redirect targets."""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError


class RedisCache:
    """Caches short_code -> target_url for the redirect path.

    Short codes and their targets never change once registered, so entries
    only expire by TTL. Click counts are not cached. Any Redis failure is
    logged and reported as a miss.
    """

    def __init__(
        self,
        redis_url: str,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
        client: Optional[redis.Redis] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: TTL for cached targets
            logger: Optional logger instance
            client: Optional pre-built client, mostly for tests
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.client = client
        self.enabled = client is not None

    async def connect(self) -> None:
        """Connect to Redis, disabling the cache if it is unreachable."""
        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.enabled = True
            self.logger.info(f"Connected to Redis, TTL={self.ttl_seconds}s")
        except (RedisError, OSError) as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    async def get_target(self, short_code: str) -> Optional[str]:
        if not self.enabled:
            return None

        try:
            return await self.client.get(self.get_cache_key(short_code))
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache get error: {e}")
            return None

    async def set_target(self, short_code: str, target_url: str) -> bool:
        if not self.enabled:
            return False

        try:
            await self.client.setex(self.get_cache_key(short_code), self.ttl_seconds, target_url)
            return True
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        if not self.enabled:
            return False

        try:
            return bool(await self.client.ping())
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache ping error: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client is not None:
            await self.client.aclose()
            self.logger.info("Redis connection closed")

    @staticmethod
    def get_cache_key(short_code: str) -> str:
        return f"microlink:target:{short_code}"
