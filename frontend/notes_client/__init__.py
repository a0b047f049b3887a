"""
GuestNotes Client — Package Initializer
=========================================

What: Client-side half of GuestNotes: anonymous identity, HTTP API wrapper,
      and the UI state controller that keeps a local note list in sync with
      the backend.

Layers:
    ┌─────────────────────────────────────┐
    │   NotesApp (state.py)               │  ← UI state + user actions
    ├──────────────────┬──────────────────┤
    │ NotesAPI (api.py)│ IdentityStore    │  ← HTTP calls │ local anon_id
    └──────────────────┴──────────────────┘
"""

from notes_client.api import NotesAPI, NotesAPIError
from notes_client.config import ClientSettings
from notes_client.identity import IdentityStore
from notes_client.models import Note
from notes_client.state import NotesApp, NotesState

__version__ = "1.0.0"

__all__ = [
    "ClientSettings",
    "IdentityStore",
    "Note",
    "NotesAPI",
    "NotesAPIError",
    "NotesApp",
    "NotesState",
]
