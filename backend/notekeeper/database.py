"""
NoteKeeper Backend - Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   A `Database` object owns one engine (and its connection pool) and hands
       out sessions that commit on success and roll back on error.
Who:   Built once by the application factory and injected into NoteService,
       SessionResolver and the seed script.
When:  Created at application construction; disposed during shutdown.

Connection Pooling Strategy (PostgreSQL):
    pool_size / max_overflow from settings
    pool_pre_ping:      validates connections before use
    pool_recycle=3600:  recycles connections every hour

SQLite (tests, local development) uses SQLAlchemy's default pool and ignores
the sizing options.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notekeeper.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this shared metadata, which `Database.create_all`
    uses to create the schema.
    """
    pass


class Database:
    """
    Process-wide handle on the datastore.

    Attributes:
        engine:          AsyncEngine managing the connection pool
        session_factory: async_sessionmaker producing AsyncSession instances
    """

    def __init__(self, url: str, echo: bool = False, **engine_options) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_options)
        # expire_on_commit=False: ORM objects stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database with the pool configuration from `settings`."""
        options = {}
        if not settings.is_sqlite:
            options = {
                "pool_size": settings.db_pool_size,
                "max_overflow": settings.db_max_overflow,
                "pool_pre_ping": settings.db_pool_pre_ping,
                "pool_recycle": 3600,
            }
        return cls(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
            **options,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a transactional session scope.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller
            3. On success: commits the transaction
            4. On error: rolls back and re-raises
            5. Always: closes the session (returns connection to pool)

        Example:
            async with database.session() as session:
                result = await session.execute(select(Note))
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create every table registered on `Base.metadata` that is missing."""
        # Models must be imported so their tables are registered
        from notekeeper import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Execute `SELECT 1`; raises if the datastore is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close all connections in the pool."""
        await self.engine.dispose()

