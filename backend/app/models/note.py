"""
GuestNotes Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - Integer primary key: store-assigned, increasing; doubles as sort tie-breaker
    - owner_id: the anonymous identity stamped at creation; any length, never updated
    - title / content: the only mutable columns
    - created_at / updated_at: UTC, timezone-aware

Index on (owner_id, created_at DESC):
    Every query filters by owner; listing also orders by created_at DESC.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A single note owned by one anonymous identity.

    Lifecycle:
        1. Created on POST /notes, stamped with the caller's owner_id
        2. title/content replaced on PUT /notes/{id} (owner match required)
        3. Row removed on DELETE /notes/{id} (owner match required)

    Query Patterns:
        - List:   WHERE owner_id = :owner ORDER BY created_at DESC, id DESC
        - Update: UPDATE ... WHERE id = :id AND owner_id = :owner RETURNING *
        - Delete: DELETE ... WHERE id = :id AND owner_id = :owner
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    owner_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Anonymous identity (X-ANON-ID) that created the note",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Last title/content change (UTC)",
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"


Index("idx_notes_owner_created_at", Note.owner_id, Note.created_at.desc())
