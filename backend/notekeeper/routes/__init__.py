# Routes package init
"""
NoteKeeper Backend - API Routes Package
=========================================

Route Inventory:
    - notes.py:   GET    {prefix}            list notes
                  GET    {prefix}/{id}       get one note
                  POST   {prefix}/new        create a note
                  PUT    {prefix}/{id}       update a note
                  DELETE {prefix}/{id}       delete a note
    - health.py:  GET    /health             service health check

{prefix} is settings.api_prefix, /api/notes by default.

Routes stay thin: resolve the caller, validate input, call NoteService.
"""
