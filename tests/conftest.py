"""Root conftest — shared fixtures: in-memory database, cache and HTTP client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys on
    - Every test gets its own ReadThroughCache driven by a controllable clock
    - The client fixture overrides get_db / get_cache; the lifespan never runs

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for catalog
      behaviour (PostgreSQL-specific features are not exercised here)
    - db_manager patched: the readiness probe reads it directly
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import bookstore.infrastructure.database as db_module
from bookstore.db.base import Base
from bookstore.infrastructure.cache import ReadThroughCache, get_cache
from bookstore.infrastructure.database import (
    DatabaseSessionManager, build_engine, get_db,
)
from bookstore.main import app


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
async def test_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
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
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ReadThroughCache(ttl_seconds=300, max_entries=256, timer=clock)


@pytest.fixture
async def client(test_engine, test_session_factory, cache):
    """FastAPI test client with storage and cache dependencies overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
