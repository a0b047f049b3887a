"""
GuestNotes Client — HTTP API Wrapper
======================================

What:  Thin async wrapper over the backend's /notes endpoints.
How:   httpx.AsyncClient; every call carries X-ANON-ID and Cache-Control:
       no-store. A non-success status, an unreadable success body or a
       transport failure raises NotesAPIError; deciding what the UI does
       with it is NotesApp's job.

Contract:
    list_notes(anon_id)                          GET    /notes         → 200 [Note]
    create_note(anon_id, title, content)         POST   /notes         → 201 Note
    update_note(anon_id, id, title, content)     PUT    /notes/{id}    → 200 Note
    delete_note(anon_id, id)                     DELETE /notes/{id}    → 204

No retries, no cancellation; httpx's default timeout applies.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from notes_client.models import Note

logger = logging.getLogger(__name__)

ANON_ID_HEADER = "X-ANON-ID"

_NOTE = TypeAdapter(Note)
_NOTE_LIST = TypeAdapter(List[Note])


class NotesAPIError(Exception):
    """
    A request did not produce the expected success response.

    Attributes:
        status: HTTP status code, or None when no response arrived (network failure)
        body:   Response text, or the transport error description
    """

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        if status is None:
            message = f"Request failed: {body}"
        else:
            message = f"{status} {body}"
        super().__init__(message)


class NotesAPI:
    """
    Usage:
        async with NotesAPI("http://localhost:5000") as api:
            notes = await api.list_notes(anon_id)

    Tests pass `transport=` (httpx.ASGITransport or httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def __aenter__(self) -> "NotesAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _headers(anon_id: str) -> Dict[str, str]:
        return {ANON_ID_HEADER: anon_id, "Cache-Control": "no-store"}

    async def _request(
        self,
        method: str,
        path: str,
        anon_id: str,
        expected_status: int,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method, path, headers=self._headers(anon_id), json=json
            )
        except httpx.HTTPError as e:
            raise NotesAPIError(None, str(e) or type(e).__name__) from e

        if response.status_code != expected_status:
            raise NotesAPIError(response.status_code, response.text)
        return response

    @staticmethod
    def _decode(response: httpx.Response, adapter: TypeAdapter) -> Any:
        """Parse a success body; anything unreadable is reported like a failed request."""
        try:
            return adapter.validate_python(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.warning("Unreadable %d response body: %s", response.status_code, e)
            raise NotesAPIError(response.status_code, response.text) from e

    async def list_notes(self, anon_id: str) -> List[Note]:
        response = await self._request("GET", "/notes", anon_id, 200)
        return self._decode(response, _NOTE_LIST)

    async def create_note(self, anon_id: str, title: str, content: str) -> Note:
        response = await self._request(
            "POST", "/notes", anon_id, 201, json={"title": title, "content": content}
        )
        return self._decode(response, _NOTE)

    async def update_note(self, anon_id: str, note_id: int, title: str, content: str) -> Note:
        response = await self._request(
            "PUT", f"/notes/{note_id}", anon_id, 200, json={"title": title, "content": content}
        )
        return self._decode(response, _NOTE)

    async def delete_note(self, anon_id: str, note_id: int) -> None:
        await self._request("DELETE", f"/notes/{note_id}", anon_id, 204)
