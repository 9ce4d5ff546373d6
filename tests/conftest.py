"""Root conftest: shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so code that bypasses get_db (readiness probe) hits the test DB

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, no external dependency
"""

import os

# Settings are read when tracker.main is imported; pin them first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789abcdef")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import tracker.infrastructure.database as db_module  # noqa: E402
import tracker.models  # noqa: E402,F401
from tracker.db.base import Base  # noqa: E402
from tracker.infrastructure.database import DatabaseSessionManager, get_db  # noqa: E402
from tracker.main import app  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def asgi_app(test_engine, test_session_factory):
    """The FastAPI app wired to the test database."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    yield app

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def client(asgi_app):
    """Raw HTTP test client against the app."""
    async with AsyncClient(
        transport=ASGITransport(app=asgi_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def register_user(client):
    """Register through the API; returns (user, auth headers)."""
    async def _register(name="Ada", email="ada@example.com", password="s3cret!"):
        res = await client.post(
            "/api/register",
            json={"name": name, "email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        data = res.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}
    return _register


@pytest.fixture
async def ada(register_user):
    return await register_user()


@pytest.fixture
async def grace(register_user):
    return await register_user(name="Grace", email="grace@example.com")
