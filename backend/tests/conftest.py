"""
Bloglist Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database:        connected in-memory SQLite Database with tables
    ├── test_client:     HTTPX AsyncClient bound to create_app(database)
    ├── create_user:     registers a user through the API
    └── login_headers:   logs a user in and returns Authorization headers
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must happen before any bloglist import reads settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET"] = "test-secret-not-real"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

from bloglist.database import Database  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession; no database needed.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database():
    """A fresh in-memory database per test (StaticPool keeps one connection)."""
    db = Database("sqlite+aiosqlite://")
    await db.connect()
    await db.create_all()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a fresh app over ASGITransport.

    ASGITransport does not run the lifespan, so the already-connected
    database is injected through create_app().
    """
    from bloglist.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def create_user(test_client):
    """Returns an async helper that registers a user and returns the JSON body."""

    async def _create(username="root", password="sekret", name="Superuser"):
        response = await test_client.post(
            "/api/users",
            json={"username": username, "name": name, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def login_headers(test_client):
    """Returns an async helper that logs in and builds Authorization headers."""

    async def _login(username="root", password="sekret"):
        response = await test_client.post(
            "/api/login",
            json={"username": username, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
