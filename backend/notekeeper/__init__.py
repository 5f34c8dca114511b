"""
NoteKeeper Backend - Application Package
==========================================

A per-user note-taking API: list, fetch, create, update and delete notes,
with ownership enforced through session-based authentication.

Architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, caller resolution
    ├─────────────────────────────────────┤
    │   Validation / Services (Logic)     │  ← field rules, ownership boundary
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
