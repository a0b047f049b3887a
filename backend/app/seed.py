"""
GuestNotes Backend — Sample Data Seeder
=========================================

What:  Inserts a few sample notes for one owner identifier.
How:   Goes through NoteService, so the same validation and stamping apply
       as for HTTP requests.
Usage: python -m app.seed --owner <anon-id> [--database-url URL]

The owner value is whatever the client stores under `anon_id`; seeding with
the identifier shown in the client makes the notes appear in its list.
"""

import argparse
import asyncio
import logging
from typing import List, Optional, Sequence

from app.config import Settings, settings as default_settings
from app.database import Database
from app.identity import OwnerContext
from app.schemas.note import NoteCreate, NoteResponse
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

SAMPLE_NOTES = [
    NoteCreate(title="Sample Note 1", content="content 1"),
    NoteCreate(title="Sample Note 2", content="content 2"),
    NoteCreate(title="Sample Note 3", content="content 3"),
]


async def seed(
    database: Database,
    owner_id: str,
    notes: Sequence[NoteCreate] = SAMPLE_NOTES,
) -> List[NoteResponse]:
    """Creates `notes` for `owner_id` in one transaction and returns them."""
    owner = OwnerContext.from_header(owner_id)
    created = []
    async with database.session() as session:
        async with session.begin():
            for payload in notes:
                created.append(await note_service.create_note(db=session, owner=owner, payload=payload))
    return created


async def _run(app_settings: Settings, owner_id: str) -> None:
    database = Database(app_settings)
    try:
        if app_settings.db_create_all:
            await database.create_all()
        created = await seed(database, owner_id)
        logger.info("Seeded %d notes for owner %s", len(created), owner_id[:8])
    finally:
        await database.dispose()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Insert sample notes for one anonymous owner.")
    parser.add_argument("--owner", required=True, help="Owner identifier (the client's anon_id)")
    parser.add_argument("--database-url", default=None, help="Overrides DATABASE_URL")
    args = parser.parse_args(argv)

    app_settings = default_settings
    if args.database_url:
        app_settings = default_settings.model_copy(update={"database_url": args.database_url})

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(_run(app_settings, args.owner))


if __name__ == "__main__":
    main()
