"""Cache Client Manager — pooled Valkey connection, pinged at startup and by /health.

Invariants:
    - One connection pool per process (initialized via init_cache)
    - Nothing in the list pipeline reads or writes the cache yet
    - health_check() never raises; it reports reachability as a bool

Design Decisions:
    - redis.asyncio client: Valkey speaks the Redis protocol
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class CacheManager:
    """Owns the async Valkey client."""

    def __init__(
        self,
        cache_url: str,
        max_connections: int = 10,
        socket_timeout: float = 3.0,
        connect_timeout: float = 5.0,
    ):
        self.client: Redis = Redis.from_url(
            cache_url,
            max_connections=max_connections,
            socket_timeout=socket_timeout,
            socket_connect_timeout=connect_timeout,
        )

    async def health_check(self) -> bool:
        try:
            return bool(await self.client.ping())
        except (RedisError, OSError) as e:
            logger.error(f"Cache health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()


# Singleton (initialized on startup)
cache_manager: CacheManager | None = None


def init_cache(cache_url: str, **kwargs) -> CacheManager:
    global cache_manager
    cache_manager = CacheManager(cache_url, **kwargs)
    return cache_manager


async def close_cache() -> None:
    global cache_manager
    if cache_manager is not None:
        await cache_manager.close()
        cache_manager = None
