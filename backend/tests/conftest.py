"""
PicTweet Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the whole suite.

Fixture overview:
    Unit tests (no database):
    ├── mock_db_session:   AsyncMock standing in for AsyncSession
    ├── make_user:         factory for detached User objects
    ├── temp_storage:      per-test directory for StorageService
    └── sample_png_base64: 1x1 PNG, base64-encoded

    API tests (SQLite through aiosqlite):
    ├── database:          creates all tables before the test, drops them after
    ├── test_client:       httpx AsyncClient bound to the ASGI app
    └── register_user:     registers an account, returns (user_json, auth headers)
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup (must run before any pictweet import reads settings)
# ══════════════════════════════════════════════════════════════════════════

_test_dir = tempfile.mkdtemp(prefix="pictweet_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.db"
os.environ["DB_SCHEMA"] = ""
os.environ["STORAGE_ROOT"] = os.path.join(_test_dir, "storage")
os.environ["JWT_SECRET_KEY"] = "test-secret-not-for-production"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

from pictweet.models import User  # noqa: E402

PNG_1X1_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.get.return_value = tweet
        mock_db_session.execute.return_value = result_with(scalar=None)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_user():
    """Factory for User instances that never touch a database."""

    def _make(user_id: int = 1, username: str = "alice", **overrides):
        fields = {
            "id": user_id,
            "username": username,
            "email": f"{username}@pictweet.io",
            "password_hash": "not-a-real-hash",
            "bio": None,
            "avatar_url": None,
            "created_at": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return User(**fields)

    return _make


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_png_base64():
    return PNG_1X1_BASE64


def _result_with(scalar=None, scalars=None, rowcount=None):
    """
    Build a MagicMock shaped like an SQLAlchemy Result.

    Args:
        scalar: returned by .scalar() and .scalar_one_or_none()
        scalars: list returned by .scalars().all() and .scalars().first()
        rowcount: value of .rowcount (DELETE statements)
    """
    result = MagicMock()
    result.scalar.return_value = scalar
    result.scalar_one_or_none.return_value = scalar
    items = list(scalars or [])
    result.scalars.return_value.all.return_value = items
    result.scalars.return_value.first.return_value = items[0] if items else None
    result.rowcount = rowcount
    return result


@pytest.fixture
def result_with():
    return _result_with


# ══════════════════════════════════════════════════════════════════════════
# API-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """Fresh tables for one test; the pool is disposed so the next event loop starts clean."""
    from pictweet.database import create_all_tables, dispose_engine, drop_all_tables

    await create_all_tables()
    yield
    await drop_all_tables()
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from pictweet.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client):
    """
    Register an account through the API.

    Returns an async callable: `user, headers = await register_user("alice")`
    """

    async def _register(username: str, password: str = "secret123", **extra):
        body = {"username": username, "email": f"{username}@pictweet.io", "password": password}
        body.update(extra)
        response = await test_client.post("/api/v1/auth/register", json=body)
        assert response.status_code == 201, response.text
        data = response.json()
        return data["user"], {"Authorization": f"Bearer {data['accessToken']}"}

    return _register
