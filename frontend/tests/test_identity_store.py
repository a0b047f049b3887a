"""
GuestNotes Client — Identity Store Tests
==========================================

What we test:
    ✅ First call mints and persists a UUID4
    ✅ A second store on the same file reuses the identifier
    ✅ Reset mints a different identifier and overwrites the file
    ✅ Corrupt or empty files are treated as "nothing stored"
"""

import json
import uuid

import pytest

from notes_client.identity import IdentityStore


class TestIdentityStore:

    @pytest.mark.asyncio
    async def test_load_missing_file(self, identity_store):
        assert await identity_store.load() is None

    @pytest.mark.asyncio
    async def test_get_or_create_mints_and_persists(self, identity_store):
        anon_id = await identity_store.get_or_create()

        assert uuid.UUID(anon_id).version == 4
        assert identity_store.path.exists()
        assert json.loads(identity_store.path.read_text()) == {"anon_id": anon_id}

    @pytest.mark.asyncio
    async def test_identifier_survives_restart(self, identity_store):
        first = await identity_store.get_or_create()

        second = await IdentityStore(identity_store.path).get_or_create()

        assert second == first

    @pytest.mark.asyncio
    async def test_reset_replaces_identifier(self, identity_store):
        old = await identity_store.get_or_create()

        new = await identity_store.reset()

        assert new != old
        assert await identity_store.load() == new

    @pytest.mark.asyncio
    async def test_clear_removes_file(self, identity_store):
        await identity_store.get_or_create()

        await identity_store.clear()

        assert not identity_store.path.exists()
        assert await identity_store.load() is None

    @pytest.mark.asyncio
    async def test_clear_without_file_is_noop(self, identity_store):
        await identity_store.clear()
        assert not identity_store.path.exists()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["not json", "[]", '{"anon_id": ""}', '{"other": "x"}'])
    async def test_unusable_file_is_replaced(self, identity_store, raw):
        identity_store.path.parent.mkdir(parents=True)
        identity_store.path.write_text(raw)

        assert await identity_store.load() is None
        anon_id = await identity_store.get_or_create()

        assert json.loads(identity_store.path.read_text()) == {"anon_id": anon_id}

    def test_path_expands_user(self):
        store = IdentityStore("~/.guestnotes/state.json")
        assert "~" not in str(store.path)
