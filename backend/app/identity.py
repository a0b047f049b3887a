"""
GuestNotes Backend — Owner Context Extraction
===============================================

What:  Turns the `X-ANON-ID` request header into a typed `OwnerContext`.
How:   `get_owner_context` is a FastAPI dependency; route handlers declare it
       and pass the resulting context explicitly to NoteService.
Who:   Every /notes route handler.

Rules:
    - The header value is trimmed; an empty or whitespace-only value counts as absent.
    - Any other string is a valid owner identifier. Nothing is registered server-side.
    - Reads tolerate an absent owner (empty result); writes call `require()`.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Header

from app.exceptions import ValidationError

ANON_ID_HEADER = "X-ANON-ID"


@dataclass(frozen=True)
class OwnerContext:
    """The caller's owner identifier for one request, or None when not supplied."""

    owner_id: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return self.owner_id is None

    def require(self) -> str:
        """Returns the owner identifier or raises ValidationError (400)."""
        if self.owner_id is None:
            raise ValidationError(
                message=f"{ANON_ID_HEADER} header is required",
                field=ANON_ID_HEADER,
            )
        return self.owner_id

    @classmethod
    def from_header(cls, raw: Optional[str]) -> "OwnerContext":
        if raw is None:
            return cls()
        value = raw.strip()
        if not value:
            return cls()
        return cls(owner_id=value)

    def log_label(self) -> str:
        """Shortened identifier for log lines; full values are never logged."""
        if self.owner_id is None:
            return "-"
        return self.owner_id[:8]


def get_owner_context(
    anon_id: Optional[str] = Header(default=None, alias=ANON_ID_HEADER),
) -> OwnerContext:
    """
    FastAPI dependency: extracts the owner context from the request headers.

    Surrounding whitespace is trimmed, so a blank `X-ANON-ID` is treated as
    absent rather than as an owner named by whitespace.
    """
    return OwnerContext.from_header(anon_id)
