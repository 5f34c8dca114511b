"""
NoteKeeper Backend - Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; `Database.create_all` reads it.
Who:   Used by NoteService for CRUD and ownership-filtered queries.

Table Design:
    - UUID primary key, generated in Python so it is known before flush
    - title / priority / description: required free text, no length limit
    - owner_id: nullable FK to users.id; NULL in the open variant
    - created_at / updated_at: UTC with timezone

    Index on owner_id + created_at DESC:
        Serves the owner-filtered "newest first" list query.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A user-authored note.

    Lifecycle:
        1. Created by NoteService.create_note (owner fixed at that moment)
        2. title / priority / description replaced by update_note
        3. Removed by delete_note
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Never altered after creation; UPDATE statements do not touch it
    owner_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_notes_owner_created_at", owner_id, created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, owner_id={self.owner_id}, "
            f"title={self.title!r})>"
        )
