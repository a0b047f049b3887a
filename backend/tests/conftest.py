"""
GuestNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the backend test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for NoteService unit tests
    ├── test_settings:   Settings pointing at a per-test SQLite file
    ├── notes_app:       FastAPI app with its lifespan running (tables created)
    ├── test_client:     HTTPX AsyncClient bound to notes_app via ASGITransport
    └── make_note:       Builds detached Note ORM instances
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Keep the module-level app in app.main off any developer .env database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.config import Settings  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models.note import Note  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_delete_missing(mock_db_session):
            mock_db_session.execute.return_value = result_with(None)
            with pytest.raises(NotFoundError): ...
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_note():
    """Factory for detached Note instances with distinct, increasing timestamps."""
    base = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

    def _make(note_id: int = 1, owner_id: str = "owner-a", title: str = "Title", content: str = "Body"):
        stamp = base + timedelta(minutes=note_id)
        return Note(
            id=note_id,
            owner_id=owner_id,
            title=title,
            content=content,
            created_at=stamp,
            updated_at=stamp,
        )

    return _make


@pytest.fixture
def test_settings(tmp_path):
    """Settings with an isolated SQLite database file for each test."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'guestnotes_test.db'}",
        db_create_all=True,
        cors_origins="http://localhost:3000",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def notes_app(test_settings):
    """
    FastAPI app with the lifespan entered.

    ASGITransport does not send lifespan events, so the fixture runs the
    lifespan context itself: the Database handle is created and tables exist
    before the first request, and the engine is disposed afterwards.
    """
    application = create_app(test_settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def test_client(notes_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=notes_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
