"""
GuestNotes Backend — Note Service (Business Logic)
===================================================

What:  Ownership-scoped CRUD over the `notes` table.
How:   Every method receives the request's AsyncSession and OwnerContext
       explicitly; all queries filter (or stamp) by the owner identifier.
Who:   Called by the /notes route handlers and the seed command.

Ownership Model:
    ┌──────────┐   X-ANON-ID   ┌──────────────┐  WHERE owner_id = :owner  ┌──────┐
    │  Client  │──────────────▶│ OwnerContext │──────────────────────────▶│  DB  │
    └──────────┘               └──────────────┘                           └──────┘

    Update and delete are single conditional statements filtered by
    id AND owner_id. No matching row means "not found", whether the id is
    unused or belongs to another owner.

Transactions:
    The service only flushes. Commit/rollback belongs to the session
    dependency (get_db_session) or the caller's `async with` block.
"""

import logging
import re
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.identity import OwnerContext
from app.models.note import Note, utcnow
from app.schemas.note import NoteCreate, NoteResponse, NoteUpdate

logger = logging.getLogger(__name__)

_NOTE_ID_PATTERN = re.compile(r"^[0-9]+$")

# Largest value a 32-bit INTEGER primary key can hold
MAX_NOTE_ID = 2**31 - 1


def parse_note_id(raw: str) -> int:
    """
    Converts a path segment into a note id.

    Raises:
        ValidationError: not a positive base-10 integer (→ 400)
        NotFoundError:   numeric but beyond the key range, so no row can match (→ 404)
    """
    value = raw.strip()
    if not _NOTE_ID_PATTERN.match(value) or int(value) < 1:
        raise ValidationError(
            message="Note id must be a positive integer",
            field="id",
            context={"value": raw[:32]},
        )
    note_id = int(value)
    if note_id > MAX_NOTE_ID:
        raise NotFoundError(resource="note", resource_id=value)
    return note_id


def _require_title(title) -> str:
    if title is None or not title.strip():
        raise ValidationError(message="Title is required", field="title")
    return title


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  Owner's notes, newest first (empty for anonymous callers)
        - create_note(): Validate and insert, stamped with the owner
        - update_note(): Conditional title/content update
        - delete_note(): Conditional delete

    Error Handling Strategy:
        Input problems raise ValidationError before touching the database.
        Missing/not-owned rows raise NotFoundError. SQLAlchemy failures are
        logged and wrapped in DatabaseError (generic 500 for the client).
    """

    async def list_notes(self, db: AsyncSession, owner: OwnerContext) -> List[NoteResponse]:
        """
        Returns every note owned by the caller, newest first.

        A request without an owner identifier gets an empty list, not an error.
        Ties on created_at are broken by descending id.
        """
        if owner.is_anonymous:
            return []

        try:
            result = await db.execute(
                select(Note)
                .where(Note.owner_id == owner.owner_id)
                .order_by(Note.created_at.desc(), Note.id.desc())
            )
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes for owner %s: %s", owner.log_label(), str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"operation": "list", "error_type": type(e).__name__},
            )

        return [NoteResponse.model_validate(note) for note in notes]

    async def create_note(
        self,
        db: AsyncSession,
        owner: OwnerContext,
        payload: NoteCreate,
    ) -> NoteResponse:
        """
        Inserts a new note stamped with the caller's owner identifier.

        Raises:
            ValidationError: owner missing, or title missing/blank (→ 400)
            DatabaseError:   insert failed (→ 500)
        """
        owner_id = owner.require()
        title = _require_title(payload.title)

        note = Note(
            owner_id=owner_id,
            title=title,
            content=payload.content or "",
        )
        try:
            db.add(note)
            await db.flush()  # Assigns id and defaults without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"operation": "create", "error_type": type(e).__name__},
            )

        logger.info("Note %s created for owner %s", note.id, owner.log_label())
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        owner: OwnerContext,
        raw_note_id: str,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Replaces title and/or content of a note the caller owns.

        Query:
            UPDATE notes SET ... WHERE id = :id AND owner_id = :owner RETURNING *

        Raises:
            ValidationError: owner missing, id malformed, title blank (→ 400)
            NotFoundError:   no row with that id for this owner (→ 404)
            DatabaseError:   update failed (→ 500)
        """
        owner_id = owner.require()
        note_id = parse_note_id(raw_note_id)

        values = {"updated_at": utcnow()}
        if payload.title is not None:
            values["title"] = _require_title(payload.title)
        if payload.content is not None:
            values["content"] = payload.content

        try:
            result = await db.execute(
                update(Note)
                .where(Note.id == note_id, Note.owner_id == owner_id)
                .values(**values)
                .returning(Note)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"operation": "update", "note_id": note_id, "error_type": type(e).__name__},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        logger.info("Note %s updated for owner %s", note_id, owner.log_label())
        return NoteResponse.model_validate(note)

    async def delete_note(
        self,
        db: AsyncSession,
        owner: OwnerContext,
        raw_note_id: str,
    ) -> None:
        """
        Removes a note the caller owns.

        Query:
            DELETE FROM notes WHERE id = :id AND owner_id = :owner RETURNING id

        Raises:
            ValidationError: owner missing or id malformed (→ 400)
            NotFoundError:   nothing deleted (→ 404)
            DatabaseError:   delete failed (→ 500)
        """
        owner_id = owner.require()
        note_id = parse_note_id(raw_note_id)

        try:
            result = await db.execute(
                delete(Note)
                .where(Note.id == note_id, Note.owner_id == owner_id)
                .returning(Note.id)
                .execution_options(synchronize_session=False)
            )
            deleted_id = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"operation": "delete", "note_id": note_id, "error_type": type(e).__name__},
            )

        if deleted_id is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        logger.info("Note %s deleted for owner %s", note_id, owner.log_label())


# NoteService holds no per-request state; one instance serves every request
note_service = NoteService()
