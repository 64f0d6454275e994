"""Unit tests for RedisCacheStore: every failure degrades, nothing raises."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from src.pf_cache.store import RedisCacheStore


@pytest.fixture
def client() -> MagicMock:
    c = MagicMock()
    c.get = AsyncMock(return_value=None)
    c.set = AsyncMock(return_value=True)
    c.delete = AsyncMock(return_value=1)
    return c


class TestGet:
    async def test_returns_stored_bytes(self, client: MagicMock) -> None:
        client.get.return_value = b'{"id": 1}'
        store = RedisCacheStore(client)

        assert await store.get("user:1") == b'{"id": 1}'
        client.get.assert_awaited_once_with("user:1")

    async def test_absent_key_is_none(self, client: MagicMock) -> None:
        store = RedisCacheStore(client)
        assert await store.get("user:404") is None

    async def test_connection_error_reported_as_miss(self, client: MagicMock) -> None:
        client.get.side_effect = RedisConnectionError("refused")
        store = RedisCacheStore(client)
        assert await store.get("user:1") is None

    async def test_timeout_reported_as_miss(self, client: MagicMock) -> None:
        client.get.side_effect = RedisTimeoutError("slow")
        store = RedisCacheStore(client)
        assert await store.get("index_posts") is None

    async def test_os_error_reported_as_miss(self, client: MagicMock) -> None:
        client.get.side_effect = OSError("network unreachable")
        store = RedisCacheStore(client)
        assert await store.get("index_posts") is None


class TestSet:
    async def test_passes_ttl_as_expiry(self, client: MagicMock) -> None:
        store = RedisCacheStore(client)

        assert await store.set("index_posts", b"[]", 60) is True
        client.set.assert_awaited_once_with("index_posts", b"[]", ex=60)

    async def test_failure_returns_false(self, client: MagicMock) -> None:
        client.set.side_effect = RedisConnectionError("down")
        store = RedisCacheStore(client)
        assert await store.set("index_posts", b"[]", 60) is False


class TestDelete:
    async def test_deleting_absent_key_succeeds(self, client: MagicMock) -> None:
        client.delete.return_value = 0
        store = RedisCacheStore(client)
        assert await store.delete("account:nobody") is True

    async def test_failure_returns_false(self, client: MagicMock) -> None:
        client.delete.side_effect = RedisTimeoutError("slow")
        store = RedisCacheStore(client)
        assert await store.delete("user:1") is False
