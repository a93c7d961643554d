"""
Albums API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the test suite.
How:   Every endpoint test gets a fresh app bound to its own SQLite file
       (aiosqlite driver), with the album table created up front.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:         Settings pointing at a scratch SQLite file
    ├── app:                   create_app(test_settings) with tables created
    ├── test_client:           HTTPX AsyncClient over ASGITransport
    ├── album_service:         the app's AlbumService (real store)
    ├── mock_album_service:    AsyncMock AlbumService injected via dependency override
    ├── mocked_client:         client for an app using mock_album_service
    ├── failing_session_factory: session factory whose statements all fail
    └── row_count:             coroutine counting rows in the album table
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="albums_test_"), "default.db")
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["FAIL_FAST"] = "false"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402

from albums_api.config import Settings  # noqa: E402
from albums_api.database import create_tables, dispose_engine  # noqa: E402
from albums_api.main import create_app  # noqa: E402
from albums_api.models.album import Album  # noqa: E402
from albums_api.routes.albums import get_album_service  # noqa: E402
from albums_api.services.album_service import AlbumService  # noqa: E402


@pytest.fixture
def test_settings(tmp_path):
    """Settings bound to a per-test SQLite database file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'albums.db'}",
        log_level="WARNING",
        fail_fast=False,
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """
    A fresh application with the album table created.

    ASGITransport does not run the lifespan, so tables are created and the
    engine disposed here.
    """
    application = create_app(test_settings)
    await create_tables(application.state.engine)
    yield application
    await dispose_engine(application.state.engine)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app without a server.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/albums")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def album_service(app) -> AlbumService:
    """The AlbumService bound to the test app's store."""
    return app.state.album_service


@pytest.fixture
def mock_album_service():
    """An AlbumService double; every method is an AsyncMock."""
    return AsyncMock(spec=AlbumService)


@pytest_asyncio.fixture
async def mocked_client(app, mock_album_service):
    """Client for an app whose handlers receive mock_album_service."""
    app.dependency_overrides[get_album_service] = lambda: mock_album_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def failing_session_factory():
    """
    A session factory whose sessions raise OperationalError on every statement.

    Simulates a store that went away mid-flight.
    """
    error = OperationalError("SELECT 1", {}, Exception("connection refused"))

    session = AsyncMock()
    session.execute = AsyncMock(side_effect=error)
    session.flush = AsyncMock(side_effect=error)
    session.commit = AsyncMock()
    session.add = MagicMock()

    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


@pytest.fixture
def sample_album_data():
    """The album used throughout the endpoint scenarios."""
    return {"title": "Blue", "artist": "Joni Mitchell", "year": 1971}


@pytest.fixture
def row_count(app):
    """Coroutine function returning the number of rows in the album table."""

    async def _count() -> int:
        async with app.state.engine.connect() as conn:
            result = await conn.execute(select(func.count()).select_from(Album))
            return result.scalar_one()

    return _count
