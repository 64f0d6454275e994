"""Best-effort key-value cache contract and its Redis backend.

The cache is strictly an optimisation over PostgreSQL:
  - get:    any transport / timeout / server error is reported as a miss (None)
  - set:    failures are logged and return False
  - delete: failures are logged and return False
Nothing in this module raises to the caller. No retries.
"""

import logging
from typing import Protocol

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> bool: ...

    async def delete(self, key: str) -> bool: ...


class RedisCacheStore:
    """CacheStore over a shared redis.asyncio client.

    The client is built by src.pf_common.redis_client.create_redis with
    socket timeouts, so every call here is bounded.
    """

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    async def get(self, key: str) -> bytes | None:
        try:
            value = await self._client.get(key)
        except (RedisError, OSError) as exc:
            logger.warning("cache unavailable on get %s: %s", key, exc)
            return None
        if value is None:
            logger.debug("cache miss: %s", key)
        return value

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> bool:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except (RedisError, OSError) as exc:
            logger.warning("cache unavailable on set %s: %s", key, exc)
            return False
        return True

    async def delete(self, key: str) -> bool:
        try:
            await self._client.delete(key)
        except (RedisError, OSError) as exc:
            logger.warning("cache unavailable on delete %s: %s", key, exc)
            return False
        return True
