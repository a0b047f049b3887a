"""
GuestNotes Client — Test Configuration (conftest.py)
======================================================

Fixture Hierarchy (all function-scoped):
    ├── identity_store: IdentityStore writing into tmp_path
    ├── backend_app:    Real backend app (lifespan entered) on a per-test SQLite file
    ├── api:            NotesAPI talking to backend_app through ASGITransport
    ├── notifications:  List collecting messages passed to NotesApp.notify
    └── client_app:     NotesApp wired to api + identity_store + notifications
"""

import os

import httpx
import pytest
import pytest_asyncio

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.config import Settings  # noqa: E402
from app.main import create_app  # noqa: E402
from notes_client.api import NotesAPI  # noqa: E402
from notes_client.identity import IdentityStore  # noqa: E402
from notes_client.state import NotesApp  # noqa: E402


@pytest.fixture
def identity_store(tmp_path):
    return IdentityStore(tmp_path / "guestnotes" / "state.json")


@pytest_asyncio.fixture
async def backend_app(tmp_path):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'client_test.db'}",
        db_create_all=True,
        log_level="WARNING",
    )
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def api(backend_app):
    async with NotesAPI("http://test", transport=httpx.ASGITransport(app=backend_app)) as client:
        yield client


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def client_app(api, identity_store, notifications):
    return NotesApp(api, identity_store, notify=notifications.append)
