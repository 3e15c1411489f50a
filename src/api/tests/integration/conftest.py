"""Integration test fixtures.

These tests need a reachable PostgreSQL database given by DATABASE_URL.
The users table in that database is emptied before each test.
"""

import os

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from main import create_app


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when no database is configured."""
    if os.getenv("DATABASE_URL"):
        return
    skip = pytest.mark.skip(reason="DATABASE_URL is not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def app():
    return create_app()


@pytest_asyncio.fixture
async def async_client(app):
    """Create async HTTP client for testing with lifespan support."""
    async with LifespanManager(app):
        async with app.state.engine.begin() as conn:
            await conn.execute(text("DELETE FROM users"))

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
