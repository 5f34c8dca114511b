"""
NoteKeeper Backend - Note Service Tests
=========================================

What:  NoteService against a real SQLite database, both variants.
How:   Callers are built directly from seeded users (no token lookup);
       store failures are simulated with a mocked Database.

What we test:
    ✅ Create/get round trip with trimmed fields
    ✅ Newest-first listing
    ✅ Update touches only the editable fields and updated_at
    ✅ Delete then get → NotFoundError
    ✅ Ownership: another user's note behaves like a missing one
    ✅ Store failures map to StoreError / CreateFailed / UpdateFailed / DeleteFailed
"""

import asyncio
import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from notekeeper.exceptions import (
    CreateFailedError,
    DeleteFailedError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    UpdateFailedError,
)
from notekeeper.models.note import Note
from notekeeper.schemas.note import NoteInput
from notekeeper.services.auth_service import AuthContext
from notekeeper.services.note_service import NoteService


def caller_for(user) -> AuthContext:
    return AuthContext(user=user, session=None)


def fields(title="Groceries", priority="high", description="Milk, eggs") -> NoteInput:
    return NoteInput(title=title, priority=priority, description=description)


async def count_notes(database) -> int:
    async with database.session() as db:
        return (await db.execute(select(func.count(Note.id)))).scalar_one()


class TestOpenVariant:
    """require_owner=False: notes are global."""

    @pytest.mark.asyncio
    async def test_create_then_get_returns_trimmed_fields(self, database):
        service = NoteService(database, require_owner=False)

        created = await service.create_note(fields("  A  ", " low ", "\tbody\n"))
        fetched = await service.get_note(created.id)

        assert (fetched.title, fetched.priority, fetched.description) == ("A", "low", "body")
        assert fetched.id == created.id
        assert fetched.legacy_id == created.id
        assert fetched.owner_id is None

    @pytest.mark.asyncio
    async def test_new_note_has_equal_timestamps(self, database):
        service = NoteService(database, require_owner=False)

        created = await service.create_note(fields())

        assert created.created_at == created.updated_at
        assert datetime.fromisoformat(created.created_at).tzinfo is not None

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, database):
        service = NoteService(database, require_owner=False)
        ids = []
        for title in ("N1", "N2", "N3"):
            ids.append((await service.create_note(fields(title=title))).id)
            await asyncio.sleep(0.01)

        listed = await service.list_notes()

        assert [n.id for n in listed] == list(reversed(ids))
        assert [n.title for n in listed] == ["N3", "N2", "N1"]

    @pytest.mark.asyncio
    async def test_list_breaks_timestamp_ties_by_id(self, database):
        service = NoteService(database, require_owner=False)
        stamp = datetime.now(timezone.utc)
        ids = [uuid.uuid4() for _ in range(4)]
        async with database.session() as db:
            for note_id in ids:
                db.add(Note(
                    id=note_id,
                    title="Same instant",
                    priority="low",
                    description="tie",
                    created_at=stamp,
                    updated_at=stamp,
                ))

        first = [n.id for n in await service.list_notes()]
        second = [n.id for n in await service.list_notes()]

        assert first == [str(i) for i in sorted(ids, reverse=True)]
        assert second == first

    @pytest.mark.asyncio
    async def test_update_changes_only_editable_fields(self, database):
        service = NoteService(database, require_owner=False)
        created = await service.create_note(fields())
        await asyncio.sleep(0.01)

        updated = await service.update_note(created.id, fields("Chores", "low", "Laundry"))

        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.owner_id == created.owner_id
        assert (updated.title, updated.priority, updated.description) == ("Chores", "low", "Laundry")
        assert datetime.fromisoformat(updated.updated_at) > datetime.fromisoformat(created.updated_at)

        fetched = await service.get_note(created.id)
        assert fetched.title == "Chores"

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, database):
        service = NoteService(database, require_owner=False)
        created = await service.create_note(fields())

        await service.delete_note(created.id)

        with pytest.raises(NotFoundError):
            await service.get_note(created.id)
        with pytest.raises(NotFoundError):
            await service.delete_note(created.id)

    @pytest.mark.asyncio
    async def test_unknown_and_malformed_ids_are_not_found(self, database):
        service = NoteService(database, require_owner=False)

        with pytest.raises(NotFoundError):
            await service.get_note(str(uuid.uuid4()))
        with pytest.raises(NotFoundError):
            await service.get_note("not-a-uuid")
        with pytest.raises(NotFoundError):
            await service.update_note("not-a-uuid", fields())
        assert await count_notes(database) == 0


class TestAuthenticatedVariant:
    """require_owner=True: every note belongs to its creator."""

    @pytest.mark.asyncio
    async def test_create_sets_owner(self, database, make_session):
        service = NoteService(database, require_owner=True)
        user, _ = await make_session()

        created = await service.create_note(fields(), caller_for(user))

        assert created.owner_id == str(user.id)

    @pytest.mark.asyncio
    async def test_create_without_caller_is_unauthorized(self, database):
        service = NoteService(database, require_owner=True)

        with pytest.raises(UnauthorizedError):
            await service.create_note(fields(), None)
        assert await count_notes(database) == 0

    @pytest.mark.asyncio
    async def test_list_without_caller_is_empty(self, database, make_session):
        service = NoteService(database, require_owner=True)
        user, _ = await make_session()
        await service.create_note(fields(), caller_for(user))

        assert await service.list_notes(None) == []

    @pytest.mark.asyncio
    async def test_other_users_note_is_invisible(self, database, make_session):
        service = NoteService(database, require_owner=True)
        owner, _ = await make_session()
        intruder, _ = await make_session()
        note = await service.create_note(fields(), caller_for(owner))

        with pytest.raises(NotFoundError):
            await service.get_note(note.id, caller_for(intruder))
        with pytest.raises(NotFoundError):
            await service.update_note(note.id, fields(title="Hijacked"), caller_for(intruder))
        with pytest.raises(NotFoundError):
            await service.delete_note(note.id, caller_for(intruder))
        assert await service.list_notes(caller_for(intruder)) == []

        # Untouched for the owner
        fetched = await service.get_note(note.id, caller_for(owner))
        assert fetched.title == "Groceries"
        assert [n.id for n in await service.list_notes(caller_for(owner))] == [note.id]

    @pytest.mark.asyncio
    async def test_missing_caller_cannot_mutate(self, database, make_session):
        service = NoteService(database, require_owner=True)
        owner, _ = await make_session()
        note = await service.create_note(fields(), caller_for(owner))

        with pytest.raises(NotFoundError):
            await service.get_note(note.id, None)
        with pytest.raises(NotFoundError):
            await service.update_note(note.id, fields(title="x"), None)
        with pytest.raises(NotFoundError):
            await service.delete_note(note.id, None)

    @pytest.mark.asyncio
    async def test_owner_survives_update(self, database, make_session):
        service = NoteService(database, require_owner=True)
        owner, _ = await make_session()
        note = await service.create_note(fields(), caller_for(owner))

        updated = await service.update_note(note.id, fields(title="Renamed"), caller_for(owner))

        assert updated.owner_id == str(owner.id)


class TestStoreFailures:
    """Driver errors surface as the operation's DatabaseError subclass."""

    def setup_method(self):
        database = MagicMock()
        database.session.return_value.__aenter__.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection refused")
        )
        self.service = NoteService(database, require_owner=False)

    @pytest.mark.asyncio
    async def test_list_failure(self):
        with pytest.raises(StoreError, match="Could not fetch notes"):
            await self.service.list_notes()

    @pytest.mark.asyncio
    async def test_get_failure(self):
        with pytest.raises(StoreError):
            await self.service.get_note(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_create_failure(self):
        with pytest.raises(CreateFailedError, match="Error creating note"):
            await self.service.create_note(fields())

    @pytest.mark.asyncio
    async def test_update_failure(self):
        with pytest.raises(UpdateFailedError):
            await self.service.update_note(str(uuid.uuid4()), fields())

    @pytest.mark.asyncio
    async def test_delete_failure(self):
        with pytest.raises(DeleteFailedError):
            await self.service.delete_note(str(uuid.uuid4()))
