"""
GuestNotes Client — UI State Controller
=========================================

What:  Owns the client-side state (note list, form fields, selection, loading
       flag, anonymous identity) and keeps it in step with the backend.
How:   Every user action is one awaited request/response round-trip; local
       state only changes after a success response.

Failure handling:
    reads  → logged, list silently emptied
    writes → logged and surfaced through `notify`, state left as it was
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import httpx

from notes_client.api import NotesAPI, NotesAPIError
from notes_client.config import ClientSettings
from notes_client.identity import IdentityStore
from notes_client.models import Note

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


def _log_notification(message: str) -> None:
    logger.warning("%s", message)


@dataclass
class NotesState:
    notes: List[Note] = field(default_factory=list)
    title: str = ""
    content: str = ""
    selected: Optional[Note] = None
    loading: bool = False
    anon_id: str = ""


class NotesApp:
    """
    Usage:
        app = NotesApp.from_settings(ClientSettings())
        await app.mount()
        app.set_form("Groceries", "milk, eggs")
        await app.submit()
    """

    def __init__(
        self,
        api: NotesAPI,
        identity: IdentityStore,
        notify: Optional[Notifier] = None,
    ):
        self.api = api
        self.identity = identity
        self.notify = notify or _log_notification
        self.state = NotesState()

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        notify: Optional[Notifier] = None,
    ) -> "NotesApp":
        return cls(
            NotesAPI(settings.api_url, transport=transport),
            IdentityStore(settings.state_path),
            notify=notify,
        )

    async def aclose(self) -> None:
        await self.api.aclose()

    # ── Loading ───────────────────────────────────────────────────────────

    async def mount(self) -> None:
        """Obtain (or mint) the identity, then load its notes."""
        self.state.anon_id = await self.identity.get_or_create()
        await self._fetch()

    async def _fetch(self) -> None:
        self.state.loading = True
        try:
            self.state.notes = await self.api.list_notes(self.state.anon_id)
        except NotesAPIError as e:
            logger.warning("Failed to load notes: %s", e)
            self.state.notes = []
        finally:
            self.state.loading = False

    # ── Form ──────────────────────────────────────────────────────────────

    def select(self, note: Note) -> None:
        self.state.selected = note
        self.state.title = note.title
        self.state.content = note.content

    def set_form(self, title: str, content: str = "") -> None:
        self.state.title = title
        self.state.content = content

    def clear_form(self) -> None:
        self.state.selected = None
        self.state.title = ""
        self.state.content = ""

    # ── Writes ────────────────────────────────────────────────────────────

    async def submit(self) -> Optional[Note]:
        """
        Update the selected note, or create a new one when nothing is selected.

        Returns the saved note, or None when the title is blank or the request
        failed (the user has already been notified). A blank title never
        reaches the backend.
        """
        if not self.state.anon_id:
            return None
        if not self.state.title.strip():
            self.notify("Title is required")
            return None

        selected = self.state.selected
        try:
            if selected is not None:
                note = await self.api.update_note(
                    self.state.anon_id, selected.id, self.state.title, self.state.content
                )
            else:
                note = await self.api.create_note(
                    self.state.anon_id, self.state.title, self.state.content
                )
        except NotesAPIError as e:
            action = "Update" if selected is not None else "Create"
            logger.error("%s failed: %s", action, e)
            self.notify(f"{action} failed: {e}")
            return None

        if selected is not None:
            self.state.notes = [note if n.id == note.id else n for n in self.state.notes]
        else:
            self.state.notes = [note] + self.state.notes
        self.clear_form()
        return note

    async def delete(self, note_id: int) -> bool:
        if not self.state.anon_id:
            return False

        try:
            await self.api.delete_note(self.state.anon_id, note_id)
        except NotesAPIError as e:
            logger.error("Delete failed: %s", e)
            self.notify(f"Delete failed: {e}")
            return False

        self.state.notes = [n for n in self.state.notes if n.id != note_id]
        if self.state.selected is not None and self.state.selected.id == note_id:
            self.clear_form()
        return True

    # ── Identity ──────────────────────────────────────────────────────────

    async def reset_identity(self) -> str:
        """
        Start over as a new guest. Notes owned by the previous identifier are
        left on the server, just no longer reachable from this client.
        """
        self.state.anon_id = await self.identity.reset()
        self.state.notes = []
        self.clear_form()
        await self._fetch()
        return self.state.anon_id
