"""
NoteKeeper Backend - Route Dependencies
=========================================

FastAPI dependencies that hand route handlers the objects built by the
application factory (stored on `app.state`) and the resolved caller.
"""

from typing import Optional

from fastapi import Request

from notekeeper.database import Database
from notekeeper.services.auth_service import AuthContext
from notekeeper.services.note_service import NoteService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


async def get_caller(request: Request) -> Optional[AuthContext]:
    """
    The (user, session) behind this request, or None.

    The open variant has no resolver and always yields None. A missing or
    invalid session never fails the request here.
    """
    resolver = request.app.state.session_resolver
    if resolver is None:
        return None
    caller = await resolver.resolve(request.headers)
    request.state.caller = caller
    return caller
