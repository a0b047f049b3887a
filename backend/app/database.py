"""
GuestNotes Backend — Database Handle & Session Management
==========================================================

What:  Async SQLAlchemy engine + session factory wrapped in a `Database` handle,
       plus the FastAPI session dependency.
How:   The application lifespan constructs one `Database`, stores it on
       `app.state.database`, and disposes it at shutdown. Route handlers receive
       a per-request session through `get_db_session`, which commits on success
       and rolls back on error.
Who:   main.py (lifecycle), route handlers (sessions), the seed command.

Connection Pooling Strategy:
    PostgreSQL: pool_size / max_overflow / pool_pre_ping from settings,
                pool_recycle=3600.
    SQLite:     SQLAlchemy's default pool for aiosqlite; sizing options are not
                passed because the pool classes used for SQLite reject them.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, `Database.create_all()`
    and Alembic's autogenerate.
    """
    pass


class Database:
    """
    Owns the engine and session factory for one application instance.

    Lifecycle:
        db = Database(settings)      # engine created, no connection yet
        await db.create_all()        # optional: development schema bootstrap
        async with db.session() as s: ...
        await db.dispose()           # closes pooled connections
    """

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.settings = settings
        self.engine = engine or self._build_engine(settings)

        # expire_on_commit=False: attributes stay readable after commit,
        # response models are built after the transaction closes
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _build_engine(settings: Settings) -> AsyncEngine:
        options = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            "echo": settings.log_level == "DEBUG",
        }
        if not settings.is_sqlite:
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )
        return create_async_engine(settings.database_url, **options)

    def session(self) -> AsyncSession:
        """Returns a new session; use as `async with db.session() as s`."""
        return self.session_factory()

    async def create_all(self) -> None:
        """Creates any missing tables registered on `Base.metadata`."""
        # Importing the models registers them with Base.metadata
        from app.models import note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (create_all)")

    async def ping(self) -> bool:
        """Runs SELECT 1; returns False instead of raising when unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()
        logger.info("Database engine disposed")


# ── Dependencies ──────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """FastAPI dependency returning the handle created by the lifespan."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's Database handle
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back, then re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
