"""
NoteKeeper Backend - Notes Route Handlers
===========================================

What:  CRUD endpoints for notes, mounted under settings.api_prefix
       (default /api/notes).
How:   Resolve the caller, validate the body where there is one, delegate
       to NoteService. Errors are raised as NoteKeeperError subclasses and
       rendered by the global handlers in main.py.

Endpoints:
    GET    /         list notes visible to the caller (newest first)
    GET    /{id}     one note
    POST   /new      create (JSON or form-encoded)
    PUT    /{id}     replace title / priority / description
    DELETE /{id}     delete
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from notekeeper.routes.dependencies import get_caller, get_note_service
from notekeeper.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteInput,
    NoteResponse,
)
from notekeeper.services.auth_service import AuthContext
from notekeeper.services.note_service import NoteService
from notekeeper.validation import note_fields

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List notes",
    description=(
        "Returns the caller's notes, newest first. In the authenticated variant a "
        "request without a valid session receives an empty list."
    ),
)
@router.get("/", response_model=List[NoteResponse], include_in_schema=False)
async def list_notes(
    caller: Optional[AuthContext] = Depends(get_caller),
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    return await service.list_notes(caller)


@router.post(
    "/new",
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing or empty field", "model": ErrorResponse},
        401: {"description": "No session (authenticated variant)", "model": ErrorResponse},
        415: {"description": "Body is neither JSON nor form-encoded", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    fields: NoteInput = Depends(note_fields),
    caller: Optional[AuthContext] = Depends(get_caller),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """
    Create a note from `title`, `priority` and `description`.

    All three fields are trimmed and must be non-empty. The body is validated
    before the store is touched.
    """
    return await service.create_note(fields, caller)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    caller: Optional[AuthContext] = Depends(get_caller),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.get_note(note_id, caller)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing or empty field", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        415: {"description": "Body is neither JSON nor form-encoded", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a note",
)
async def update_note(
    note_id: str,
    fields: NoteInput = Depends(note_fields),
    caller: Optional[AuthContext] = Depends(get_caller),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.update_note(note_id, fields, caller)


@router.delete(
    "/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    caller: Optional[AuthContext] = Depends(get_caller),
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    await service.delete_note(note_id, caller)
    return MessageResponse(message="Note deleted successfully")
