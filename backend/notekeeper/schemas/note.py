"""
NoteKeeper Backend - Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the API contract with the frontend.
How:   NoteInput validates the three editable fields; NoteResponse is the
       "note view" returned by every note endpoint.

Note view wire format (camelCase, kept compatible with existing clients):
    {
        "id": "3f0c...",
        "_id": "3f0c...",            legacy alias of id
        "title": "Groceries",
        "priority": "high",
        "description": "Milk, eggs",
        "ownerId": "9a1e..." | null,
        "createdAt": "2024-01-15T12:00:00.123456+00:00",
        "updatedAt": "2024-01-15T12:00:00.123456+00:00"
    }
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteInput(BaseModel):
    """
    The editable fields of a note, trimmed and required.

    Strict strings: numbers, lists or uploaded files are rejected rather than
    coerced.
    """
    model_config = ConfigDict(str_strip_whitespace=True, strict=True, extra="ignore")

    title: str = Field(min_length=1)
    priority: str = Field(min_length=1)
    description: str = Field(min_length=1)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


def isoformat_utc(value: datetime) -> str:
    """Render a timestamp as ISO 8601 in UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


class NoteResponse(BaseModel):
    """
    Full representation of a note.
    Returned by every note endpoint except DELETE.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique note identifier (UUID)")
    legacy_id: str = Field(alias="_id", description="Same value as id")
    title: str
    priority: str
    description: str
    owner_id: Optional[str] = Field(default=None, alias="ownerId")
    created_at: str = Field(alias="createdAt", description="ISO 8601, UTC")
    updated_at: str = Field(alias="updatedAt", description="ISO 8601, UTC")

    @classmethod
    def from_note(cls, note) -> "NoteResponse":
        note_id = str(note.id)
        return cls(
            id=note_id,
            legacy_id=note_id,
            title=note.title,
            priority=note.priority,
            description=note.description,
            owner_id=str(note.owner_id) if note.owner_id is not None else None,
            created_at=isoformat_utc(note.created_at),
            updated_at=isoformat_utc(note.updated_at),
        )


class MessageResponse(BaseModel):
    """Plain confirmation body, e.g. after DELETE."""
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '3f0c...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    auth_enabled: bool = Field(description="Whether notes are scoped to sessions")
    uptime_seconds: float = Field(description="Seconds since service started")
