# Services package init
"""
NoteKeeper Backend - Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - NoteService:     list / get / create / update / delete with ownership
    - SessionResolver: request headers → optional (user, session) caller
    - passwords:       passlib hashing for seeded credentials

Services receive the shared Database at construction and are built once by
the application factory.
"""
