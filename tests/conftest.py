"""Shared test fixtures."""

import os

# Settings() requires a JWT secret at import time
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from src.pf_common.policy import CachePolicy  # noqa: E402
from tests.factories import FakeCacheStore  # noqa: E402


@pytest.fixture
def cache() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def policy() -> CachePolicy:
    return CachePolicy()


@pytest.fixture
def db() -> MagicMock:
    """AsyncSession stand-in; repositories are mocked, so execute is never reached."""
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session
