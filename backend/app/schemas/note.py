"""
GuestNotes Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between client and backend.
How:   FastAPI validates request bodies against these models, serializes
       responses, and generates the OpenAPI document from them.

Design Decision:
    Request models accept missing/null title and content. Presence is checked
    by NoteService so that a missing title produces the application's 400
    validation_error instead of a schema-level error.

    Response models use camelCase aliases (createdAt, updatedAt) to match the
    JSON the browser client consumes. The owner identifier is never echoed.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /notes."""
    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body (may be empty)")


class NoteUpdate(BaseModel):
    """
    Body of PUT /notes/{id}.

    Omitted fields keep their stored value; a provided title must be non-empty.
    """
    title: Optional[str] = Field(default=None, description="New title (non-empty when given)")
    content: Optional[str] = Field(default=None, description="New body")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Representation of one note.
    Who:   Returned by every notes endpoint except DELETE.
    """
    id: int = Field(description="Store-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last modification (UTC ISO 8601)")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; stored values are always UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


# ══════════════════════════════════════════════════════════════════════════
# Error / Status Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (validation_error, not_found, server_error)
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "validation_error",
            "message": "X-ANON-ID header is required",
            "details": {"field": "X-ANON-ID"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class StatusResponse(BaseModel):
    """Body of GET /."""
    status: str = Field(default="ok")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
