"""
GuestNotes Backend — Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn app.main:app`), Alembic, pytest and the seed command.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │   Owner context (identity.py)       │  ← X-ANON-ID extraction
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Ownership-scoped CRUD
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
