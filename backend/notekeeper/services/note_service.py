"""
NoteKeeper Backend - Note Service (Ownership Boundary)
========================================================

What:  The five note operations: list, get, create, update, delete.
How:   Each operation is one transaction against the injected Database, with
       the caller's ownership folded into the SQL WHERE clause.
Who:   Called by the route handlers in routes/notes.py.

Visibility rule (`require_owner` is True in the authenticated variant):

    require_owner   caller      rows visible
    ─────────────   ─────────   ───────────────────────────
    False           any         all notes
    True            present     notes with owner_id = caller.user.id
    True            None        none

Update and delete are single conditional statements
(UPDATE/DELETE ... WHERE id = :id AND <visibility>), so a note owned by
someone else, a missing note and a note deleted concurrently all end in the
same NotFoundError.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import ColumnElement, delete, desc, false, select, true, update

from notekeeper.database import Database
from notekeeper.exceptions import (
    CreateFailedError,
    DeleteFailedError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    UpdateFailedError,
)
from notekeeper.models.note import Note
from notekeeper.schemas.note import NoteInput, NoteResponse
from notekeeper.services.auth_service import AuthContext

logger = logging.getLogger(__name__)


def _parse_note_id(note_id: str) -> uuid.UUID:
    """Malformed identifiers cannot name any note, so they are NotFound."""
    try:
        return uuid.UUID(str(note_id))
    except ValueError:
        raise NotFoundError(resource="note", resource_id=str(note_id))


class NoteService:
    """
    Business logic layer for note operations.

    Args:
        database:       shared Database handle (one engine per process)
        require_owner:  True for the authenticated variant

    Error Handling Strategy:
        NotFoundError and UnauthorizedError propagate unchanged. Any other
        failure is logged and wrapped in the DatabaseError subclass of the
        operation (StoreError, CreateFailedError, UpdateFailedError,
        DeleteFailedError), hiding driver details from the client.
    """

    def __init__(self, database: Database, require_owner: bool = True) -> None:
        self._database = database
        self.require_owner = require_owner

    def _visible_to(self, caller: Optional[AuthContext]) -> ColumnElement[bool]:
        if not self.require_owner:
            return true()
        if caller is None:
            return false()
        return Note.owner_id == caller.user_id

    async def list_notes(self, caller: Optional[AuthContext] = None) -> List[NoteResponse]:
        """
        Notes visible to `caller`, newest first.

        In the authenticated variant a request without a session gets an
        empty list rather than an error.
        """
        try:
            async with self._database.session() as db:
                result = await db.execute(
                    select(Note)
                    .where(self._visible_to(caller))
                    .order_by(desc(Note.created_at), desc(Note.id))
                )
                notes = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not fetch notes",
                context={"error_type": type(e).__name__},
            ) from e

        return [NoteResponse.from_note(note) for note in notes]

    async def get_note(
        self, note_id: str, caller: Optional[AuthContext] = None
    ) -> NoteResponse:
        """
        A single note by ID.

        Raises:
            NotFoundError: no such note, or not visible to `caller` (→ 404)
            StoreError:    query execution failed (→ 500)
        """
        nid = _parse_note_id(note_id)
        try:
            async with self._database.session() as db:
                result = await db.execute(
                    select(Note).where(Note.id == nid, self._visible_to(caller))
                )
                note = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching note %s: %s", nid, str(e))
            raise StoreError(
                message="Could not fetch note",
                context={"note_id": str(nid)},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(nid))
        return NoteResponse.from_note(note)

    async def create_note(
        self, fields: NoteInput, caller: Optional[AuthContext] = None
    ) -> NoteResponse:
        """
        Persist a new note.

        The owner is the caller's user in the authenticated variant and is
        never set afterwards.

        Raises:
            UnauthorizedError:  authenticated variant and no caller (→ 401)
            CreateFailedError:  insert failed (→ 500)
        """
        owner_id = None
        if self.require_owner:
            if caller is None:
                raise UnauthorizedError(message="Sign in to create notes")
            owner_id = caller.user_id

        now = datetime.now(timezone.utc)
        note = Note(
            title=fields.title,
            priority=fields.priority,
            description=fields.description,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self._database.session() as db:
                db.add(note)
                await db.flush()
        except Exception as e:
            logger.error("Error creating note: %s", str(e), exc_info=True)
            raise CreateFailedError(
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created (owner=%s)", note.id, owner_id)
        return NoteResponse.from_note(note)

    async def update_note(
        self, note_id: str, fields: NoteInput, caller: Optional[AuthContext] = None
    ) -> NoteResponse:
        """
        Replace title, priority and description of a visible note.

        id, owner_id and created_at are left untouched; updated_at is set to
        the current time.

        Raises:
            NotFoundError:      no visible note with this ID (→ 404)
            UpdateFailedError:  statement failed (→ 500)
        """
        nid = _parse_note_id(note_id)
        try:
            async with self._database.session() as db:
                result = await db.execute(
                    update(Note)
                    .where(Note.id == nid, self._visible_to(caller))
                    .values(
                        title=fields.title,
                        priority=fields.priority,
                        description=fields.description,
                        updated_at=datetime.now(timezone.utc),
                    )
                    .returning(Note)
                )
                note = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error updating note %s: %s", nid, str(e), exc_info=True)
            raise UpdateFailedError(
                context={"note_id": str(nid), "error_type": type(e).__name__},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(nid))
        logger.info("Note %s updated", nid)
        return NoteResponse.from_note(note)

    async def delete_note(self, note_id: str, caller: Optional[AuthContext] = None) -> None:
        """
        Remove a visible note.

        Raises:
            NotFoundError:      no visible note with this ID (→ 404)
            DeleteFailedError:  statement failed (→ 500)
        """
        nid = _parse_note_id(note_id)
        try:
            async with self._database.session() as db:
                result = await db.execute(
                    delete(Note)
                    .where(Note.id == nid, self._visible_to(caller))
                    .execution_options(synchronize_session=False)
                )
                deleted = result.rowcount
        except Exception as e:
            logger.error("Error deleting note %s: %s", nid, str(e), exc_info=True)
            raise DeleteFailedError(
                context={"note_id": str(nid), "error_type": type(e).__name__},
            ) from e

        if not deleted:
            raise NotFoundError(resource="note", resource_id=str(nid))
        logger.info("Note %s deleted", nid)
