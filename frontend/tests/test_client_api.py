"""
GuestNotes Client — NotesAPI Tests
====================================

What:  The HTTP wrapper against a scripted transport (httpx.MockTransport)
       and against the real backend (httpx.ASGITransport).

What we test:
    ✅ Identity and no-store headers on every request
    ✅ camelCase payloads parsed into Note
    ✅ Unexpected status → NotesAPIError(status, body)
    ✅ Transport failure → NotesAPIError(None, ...)
    ✅ Unreadable success body → NotesAPIError(status, body)
    ✅ Full CRUD round-trip against the backend
"""

import json

import httpx
import pytest

from notes_client.api import NotesAPI, NotesAPIError

ANON = "3f0c6a1e-5b7d-4e2a-9c84-cccccccccccc"

NOTE_JSON = {
    "id": 7,
    "title": "Groceries",
    "content": "milk",
    "createdAt": "2026-01-15T12:00:00Z",
    "updatedAt": "2026-01-15T12:00:00Z",
}


def scripted(handler):
    return NotesAPI("http://notes.test", transport=httpx.MockTransport(handler))


class TestNotesAPIScripted:

    @pytest.mark.asyncio
    async def test_sends_identity_and_no_store(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with scripted(handler) as api:
            await api.list_notes(ANON)

        assert seen[0].headers["X-ANON-ID"] == ANON
        assert seen[0].headers["Cache-Control"] == "no-store"
        assert seen[0].url.path == "/notes"

    @pytest.mark.asyncio
    async def test_parses_camel_case_note(self):
        async with scripted(lambda request: httpx.Response(200, json=[NOTE_JSON])) as api:
            notes = await api.list_notes(ANON)

        assert len(notes) == 1
        assert notes[0].id == 7
        assert notes[0].title == "Groceries"
        assert notes[0].created_at.year == 2026

    @pytest.mark.asyncio
    async def test_create_posts_title_and_content(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json=NOTE_JSON)

        async with scripted(handler) as api:
            note = await api.create_note(ANON, "Groceries", "milk")

        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {
            "title": "Groceries",
            "content": "milk",
        }
        assert note.id == 7

    @pytest.mark.asyncio
    async def test_unexpected_status_raises(self):
        body = '{"error":"not_found","message":"Note not found"}'

        async with scripted(lambda request: httpx.Response(404, text=body)) as api:
            with pytest.raises(NotesAPIError) as exc_info:
                await api.delete_note(ANON, 99)

        assert exc_info.value.status == 404
        assert exc_info.value.body == body
        assert str(exc_info.value).startswith("404 ")

    @pytest.mark.asyncio
    async def test_wrong_success_code_raises(self):
        async with scripted(lambda request: httpx.Response(200, json=NOTE_JSON)) as api:
            with pytest.raises(NotesAPIError) as exc_info:
                await api.create_note(ANON, "t", "c")

        assert exc_info.value.status == 200

    @pytest.mark.asyncio
    async def test_network_failure_has_no_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with scripted(handler) as api:
            with pytest.raises(NotesAPIError) as exc_info:
                await api.list_notes(ANON)

        assert exc_info.value.status is None
        assert "connection refused" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_non_json_success_body_raises(self):
        async with scripted(lambda request: httpx.Response(200, text="<html>proxy</html>")) as api:
            with pytest.raises(NotesAPIError) as exc_info:
                await api.list_notes(ANON)

        assert exc_info.value.status == 200
        assert exc_info.value.body == "<html>proxy</html>"

    @pytest.mark.asyncio
    async def test_wrongly_shaped_success_body_raises(self):
        async with scripted(lambda request: httpx.Response(201, json={"ok": True})) as api:
            with pytest.raises(NotesAPIError) as exc_info:
                await api.create_note(ANON, "t", "c")

        assert exc_info.value.status == 201

    @pytest.mark.asyncio
    async def test_list_body_must_be_an_array(self):
        async with scripted(lambda request: httpx.Response(200, json=NOTE_JSON)) as api:
            with pytest.raises(NotesAPIError):
                await api.list_notes(ANON)


class TestNotesAPIAgainstBackend:

    @pytest.mark.asyncio
    async def test_crud_round_trip(self, api):
        created = await api.create_note(ANON, "First", "draft")
        assert created.id >= 1

        updated = await api.update_note(ANON, created.id, "First", "final")
        assert updated.id == created.id
        assert updated.content == "final"

        listed = await api.list_notes(ANON)
        assert [n.id for n in listed] == [created.id]
        assert listed[0].content == "final"

        await api.delete_note(ANON, created.id)
        assert await api.list_notes(ANON) == []

    @pytest.mark.asyncio
    async def test_missing_title_rejected(self, api):
        with pytest.raises(NotesAPIError) as exc_info:
            await api.create_note(ANON, "", "content")

        assert exc_info.value.status == 400

    @pytest.mark.asyncio
    async def test_other_identity_gets_not_found(self, api):
        created = await api.create_note(ANON, "Mine", "")

        with pytest.raises(NotesAPIError) as exc_info:
            await api.delete_note("someone-else", created.id)

        assert exc_info.value.status == 404
        assert [n.id for n in await api.list_notes(ANON)] == [created.id]
