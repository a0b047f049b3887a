"""
GuestNotes Client — Anonymous Identity Store
==============================================

What:  Mints, persists and resets the anonymous identifier sent as X-ANON-ID.
How:   A small JSON file (`{"anon_id": "<uuid4>"}`) under the user's home
       directory plays the role of browser local storage. File I/O goes
       through aiofiles so the event loop is never blocked.

Lifecycle:
    first run     → no file → mint UUID4 → write file
    later runs    → read file → reuse the same identifier
    reset()       → mint a new UUID4 and overwrite; notes created under the
                    old identifier stay on the server but are no longer listed
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

STORAGE_KEY = "anon_id"


class IdentityStore:
    """Client-local persisted anonymous identity (single key `anon_id`)."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    @staticmethod
    def mint() -> str:
        return str(uuid.uuid4())

    async def load(self) -> Optional[str]:
        """
        Returns the stored identifier, or None when nothing usable is stored.

        An unreadable or malformed file counts as "nothing stored"; the next
        get_or_create() overwrites it.
        """
        if not await aiofiles.os.path.exists(self.path):
            return None
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                data = json.loads(await f.read())
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable identity file %s: %s", self.path, e)
            return None

        value = data.get(STORAGE_KEY) if isinstance(data, dict) else None
        if isinstance(value, str) and value.strip():
            return value
        return None

    async def save(self, anon_id: str) -> None:
        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps({STORAGE_KEY: anon_id}))
        await aiofiles.os.replace(tmp_path, self.path)

    async def get_or_create(self) -> str:
        """Reads the stored identifier, minting and persisting one if absent."""
        anon_id = await self.load()
        if anon_id is None:
            anon_id = self.mint()
            await self.save(anon_id)
            logger.info("Minted new anonymous identity %s", anon_id[:8])
        return anon_id

    async def clear(self) -> None:
        if await aiofiles.os.path.exists(self.path):
            await aiofiles.os.remove(self.path)

    async def reset(self) -> str:
        """Discards the stored identifier and persists a freshly minted one."""
        await self.clear()
        return await self.get_or_create()
