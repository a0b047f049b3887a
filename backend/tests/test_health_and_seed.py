"""
GuestNotes Backend — Health Routes, Database Handle and Seeder Tests
=====================================================================

What we test:
    ✅ GET / liveness body
    ✅ GET /health reports the database as connected
    ✅ Database.ping() is False for an unreachable database
    ✅ The seeder inserts sample notes visible only to the given owner
"""

import pytest

from app import __version__
from app.config import Settings
from app.database import Database
from app.identity import OwnerContext
from app.seed import SAMPLE_NOTES, seed
from app.services.note_service import note_service


class TestHealthRoutes:

    @pytest.mark.asyncio
    async def test_root_is_ok(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__
        assert body["uptime_seconds"] >= 0


class TestDatabaseHandle:

    @pytest.mark.asyncio
    async def test_ping_unreachable_database(self, tmp_path):
        missing_dir = tmp_path / "does-not-exist"
        database = Database(Settings(database_url=f"sqlite+aiosqlite:///{missing_dir / 'x.db'}"))
        try:
            assert await database.ping() is False
        finally:
            await database.dispose()

    @pytest.mark.asyncio
    async def test_create_all_is_idempotent(self, test_settings):
        database = Database(test_settings)
        try:
            await database.create_all()
            await database.create_all()
            assert await database.ping() is True
        finally:
            await database.dispose()


class TestSeed:

    @pytest.mark.asyncio
    async def test_seed_creates_sample_notes_for_owner(self, test_settings):
        database = Database(test_settings)
        try:
            await database.create_all()
            created = await seed(database, "seed-owner")

            async with database.session() as session:
                mine = await note_service.list_notes(session, OwnerContext(owner_id="seed-owner"))
                theirs = await note_service.list_notes(session, OwnerContext(owner_id="someone-else"))
        finally:
            await database.dispose()

        assert len(created) == len(SAMPLE_NOTES)
        assert [n.title for n in mine] == ["Sample Note 3", "Sample Note 2", "Sample Note 1"]
        assert theirs == []
