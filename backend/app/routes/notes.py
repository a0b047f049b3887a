"""
GuestNotes Backend — Notes Route Handlers
===========================================

What:  GET/POST /notes, PUT/DELETE /notes/{id}.
How:   Each handler receives the session and the OwnerContext through
       dependencies and delegates to NoteService. Errors are raised as
       application exceptions and formatted by the global handlers in main.py.
Who:   Called by the notes client.

Caching:
    Note lists are per-owner and change on every write, so GET /notes is
    served with Cache-Control: no-store.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.identity import OwnerContext, get_owner_context
from app.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        200: {"description": "The caller's notes, newest first (empty without X-ANON-ID)"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the caller's notes",
)
async def list_notes(
    response: Response,
    owner: OwnerContext = Depends(get_owner_context),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    notes = await note_service.list_notes(db=db, owner=owner)
    response.headers["Cache-Control"] = "no-store"
    return notes


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        201: {"description": "Note created", "model": NoteResponse},
        400: {"description": "Missing X-ANON-ID or title", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note owned by the caller",
)
async def create_note(
    payload: NoteCreate,
    owner: OwnerContext = Depends(get_owner_context),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.create_note(db=db, owner=owner, payload=payload)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        200: {"description": "Note updated", "model": NoteResponse},
        400: {"description": "Missing X-ANON-ID, malformed id or blank title", "model": ErrorResponse},
        404: {"description": "No such note for this owner", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update title/content of one of the caller's notes",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    owner: OwnerContext = Depends(get_owner_context),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Args:
        note_id: Raw path segment. Parsed by the service so a malformed id
                 yields the application's 400 rather than FastAPI's 422.
    """
    return await note_service.update_note(
        db=db,
        owner=owner,
        raw_note_id=note_id,
        payload=payload,
    )


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Note deleted"},
        400: {"description": "Missing X-ANON-ID or malformed id", "model": ErrorResponse},
        404: {"description": "No such note for this owner", "model": ErrorResponse},
    },
    summary="Delete one of the caller's notes",
)
async def delete_note(
    note_id: str,
    owner: OwnerContext = Depends(get_owner_context),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, owner=owner, raw_note_id=note_id)
    return Response(status_code=204)
