"""Redis client factory for the shared cache.

Values are raw bytes (JSON payloads produced by src.pf_cache.codec), so the
client is created with decode_responses=False. Every socket operation is
bounded by CACHE_TIMEOUT_SECONDS.
"""

import redis.asyncio as aioredis

from config.settings import Settings


def create_redis(settings: Settings) -> aioredis.Redis:
    """Create the process-wide Redis connection pool."""
    return aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=False,
        socket_timeout=settings.CACHE_TIMEOUT_SECONDS,
        socket_connect_timeout=settings.CACHE_TIMEOUT_SECONDS,
    )


async def close_redis(client: aioredis.Redis) -> None:
    """Close the Redis connection pool."""
    await client.aclose()
