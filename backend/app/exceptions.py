"""
GuestNotes Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the notes service error taxonomy.
How:   Each exception carries a user-facing message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into JSON
       error responses with the matching HTTP status code.
Who:   Raised by the owner-context extraction step and NoteService; caught by
       the global handlers.

Exception Hierarchy:
    GuestNotesError (base)
    ├── ValidationError   → 400 Bad Request (missing identity, title, bad id)
    ├── NotFoundError     → 404 Not Found (absent OR owned by someone else)
    └── DatabaseError     → 500 Internal Server Error (generic message)
"""

from typing import Any, Dict, Optional


class GuestNotesError(Exception):
    """
    Base exception for all GuestNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(GuestNotesError):
    """
    Raised when client input fails a presence or format check.

    When:    X-ANON-ID missing on a write, empty title, non-numeric note id,
             unparseable request body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Title is required",
            "details": {"field": "title"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(GuestNotesError):
    """
    Raised when a note does not exist for the requesting owner.

    The same exception (and the same response) is used whether the row is
    absent or belongs to another owner, so non-owners cannot probe for ids.
    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(GuestNotesError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context
    (operation, original exception type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
