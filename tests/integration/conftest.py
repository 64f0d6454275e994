"""Integration-test fixtures.

Needs PostgreSQL migrated with `alembic upgrade head` and a Redis server, both
at the URLs in config/settings.py. All tests share one event loop and run the
application lifespan once, so the engine and Redis pools stay valid across
the session.
"""

import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client with the lifespan running."""
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def author(client: AsyncClient) -> dict:
    """A freshly registered account: {"name", "headers", "csrf"}."""
    name = f"it_{uuid.uuid4().hex[:10]}"
    resp = await client.post(
        "/api/v1/auth/register", json={"account_name": name, "password": "pass_word"}
    )
    data = resp.json()["data"]
    return {
        "name": name,
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
        "csrf": data["csrf_token"],
    }
