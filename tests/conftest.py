# File: tests/conftest.py
"""Pytest configuration and fixtures."""

import os

# The module-level engine in timetracker.core.db is never used by tests
# (get_db is overridden) but must not need a PostgreSQL driver.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./timetracker_unused.db")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from timetracker.core.db import Base, get_db
from timetracker.main import create_app

# Import all models
from timetracker.models.work_session import WorkSession  # noqa: F401
from tests.factories import (
    ADMIN_PASSWORD,
    ADMIN_PASSWORD_HASH,
    ALLOWED_ORIGIN,
    CLIENT_PASSWORD,
    CLIENT_PASSWORD_HASH,
)


@pytest.fixture(autouse=True)
def app_env(monkeypatch):
    """Deterministic configuration for every test."""
    monkeypatch.setenv("ADMIN_USERNAME", "admin")
    monkeypatch.setenv("CLIENT_USERNAME", "client")
    monkeypatch.setenv("ADMIN_PASSWORD_HASH", ADMIN_PASSWORD_HASH)
    monkeypatch.setenv("CLIENT_PASSWORD_HASH", CLIENT_PASSWORD_HASH)
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    monkeypatch.delenv("CLIENT_PASSWORD", raising=False)
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", ALLOWED_ORIGIN)
    monkeypatch.delenv("CONTRACTED_HOURS", raising=False)
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Fresh schema per test. SQLite file by default, TEST_DATABASE_URL to override."""
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine):
    """Create fresh DB session for each test."""
    async_session_maker = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app(db_session: AsyncSession):
    """App with the DB dependency bound to the test session."""
    app = create_app()

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def unauthenticated_client(app) -> AsyncClient:
    """AsyncClient without credentials (for testing auth failures)."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_client(app, db_session: AsyncSession) -> AsyncClient:
    """AsyncClient sending the admin's Basic Auth credentials."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        auth=("admin", ADMIN_PASSWORD),
    ) as ac:
        ac.db_session = db_session
        yield ac


@pytest_asyncio.fixture
async def client_client(app, db_session: AsyncSession) -> AsyncClient:
    """AsyncClient sending the read-only client's Basic Auth credentials."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        auth=("client", CLIENT_PASSWORD),
    ) as ac:
        ac.db_session = db_session
        yield ac
