"""
NoteKeeper Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh SQLite database (aiosqlite) in its tmp_path;
       HTTP tests talk to the app through httpx's ASGITransport.

Fixture Hierarchy (all function-scoped):
    ├── database:       Database with all tables created
    ├── open_settings / auth_settings: Settings for each variant
    ├── open_client / auth_client:     AsyncClient bound to an app instance
    ├── make_session:   factory creating a user + live session, returns token
    └── note_payload:   valid create/update body
"""

import os
import secrets
import tempfile
import uuid
from datetime import datetime, timedelta, timezone

# Settings are read at import time; point them away from PostgreSQL first
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="notekeeper_test_"), "app.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notekeeper.config import Settings
from notekeeper.database import Database
from notekeeper.main import create_app
from notekeeper.models.user import ROLE_USER, Session, User


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database on a per-test SQLite file with every table created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def open_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        auth_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture
def auth_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        auth_enabled=True,
        cors_origins="http://localhost:3000",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def open_client(database, open_settings):
    """AsyncClient for the open variant."""
    app = create_app(open_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def auth_client(database, auth_settings):
    """AsyncClient for the authenticated variant."""
    app = create_app(auth_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_session(database):
    """
    Factory creating a user with one session.

    Usage:
        user, token = await make_session()
        await auth_client.get("/api/notes", headers={"Authorization": f"Bearer {token}"})
    """

    async def _make(expires_in: timedelta = timedelta(hours=1), role: str = ROLE_USER):
        token = secrets.token_urlsafe(24)
        async with database.session() as db:
            user = User(
                email=f"{uuid.uuid4().hex[:10]}@example.com",
                name="Test User",
                role=role,
                password_hash="not-a-real-hash",
            )
            db.add(user)
            await db.flush()
            session = Session(
                token=token,
                user_id=user.id,
                expires_at=datetime.now(timezone.utc) + expires_in,
            )
            db.add(session)
        return user, token

    return _make


@pytest.fixture
def note_payload():
    return {"title": "Groceries", "priority": "high", "description": "Milk, eggs"}
