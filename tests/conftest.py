"""Pytest fixtures for testing."""
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from api.main import create_app
from core.config import Settings
from models.base import Base
from services.bookmark_store import SqlBookmarkStore

TEST_API_TOKEN = "test-api-token"
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        api_token=TEST_API_TOKEN,
        log_level="WARNING",
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create an in-memory SQLite engine with the schema in place.

    StaticPool keeps a single connection so every session sees the same database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for inspecting rows directly, outside the API."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> SqlBookmarkStore:
    """Bookmark store over the test database."""
    return SqlBookmarkStore(session_factory)


@pytest.fixture
async def client(settings: Settings, store: SqlBookmarkStore) -> AsyncGenerator[AsyncClient]:
    """Create a test client that presents the configured API token."""
    app = create_app(settings, store)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ) as test_client:
        yield test_client


@pytest.fixture
async def anonymous_client(
    settings: Settings, store: SqlBookmarkStore,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client that sends no Authorization header."""
    app = create_app(settings, store)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client
