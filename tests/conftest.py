# File: tests/conftest.py
"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from bizpass.api.auth import get_current_user
from bizpass.core.cache import clear_cache
from bizpass.core.db import Base, get_db
from bizpass.main import create_app

# Import all models so metadata knows every table
from bizpass.models import (  # noqa: F401
    Business,
    BusinessItem,
    Document,
    DocumentSequence,
    EntryPass,
    Event,
    PassScan,
    User,
)
from tests.factories import UserFactory


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Uploads land in a per-test directory; verification links use the request origin."""
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path / "media"))
    monkeypatch.setenv("STORAGE_PUBLIC_URL", "/media")
    monkeypatch.delenv("APP_ORIGIN", raising=False)
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    clear_cache()
    yield
    clear_cache()


@pytest_asyncio.fixture(scope="function")
async def db_session(tmp_path):
    """Fresh SQLite database file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def second_session(db_session: AsyncSession):
    """Independent session on the same database, for tests with two writers."""
    async_session_maker = async_sessionmaker(
        db_session.bind, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session_maker() as session:
        yield session
        await session.rollback()



def _build_client(db_session: AsyncSession, user: User | None) -> AsyncClient:
    app = create_app()

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    if user is not None:

        async def override_get_current_user():
            return user

        app.dependency_overrides[get_current_user] = override_get_current_user

    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await UserFactory.create(db_session, email="owner@example.com", full_name="Ama Owner")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await UserFactory.create(db_session, email="other@example.com", full_name="Kofi Other")


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, test_user: User):
    """Client authenticated as test_user."""
    async with _build_client(db_session, test_user) as ac:
        ac.test_user = test_user
        ac.db_session = db_session
        yield ac


@pytest_asyncio.fixture
async def other_client(db_session: AsyncSession, other_user: User):
    """Client authenticated as a second, unrelated user."""
    async with _build_client(db_session, other_user) as ac:
        ac.test_user = other_user
        ac.db_session = db_session
        yield ac


@pytest_asyncio.fixture
async def unauthenticated_client(db_session: AsyncSession):
    """Client without an identity override (for testing auth failures)."""
    async with _build_client(db_session, None) as ac:
        ac.db_session = db_session
        yield ac
