# Middleware package init
"""
NoteKeeper Backend - Middleware Package
=========================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first so every log line and error body can carry it
    - Logging measures everything below it, including CORS preflights
"""
