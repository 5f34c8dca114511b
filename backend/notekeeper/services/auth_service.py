"""
NoteKeeper Backend - Session Resolver
=======================================

What:  Turns request headers into an optional (user, session) caller.
How:   Reads a token from `Authorization: Bearer <token>` or, failing that,
       from the session cookie, then loads the matching unexpired session
       together with its user.
Who:   Called once per request by the `get_caller` route dependency when the
       authenticated variant is enabled.

An absent, unknown or expired token yields None. The resolver never rejects
a request by itself; operations decide whether a caller is required.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Optional

from sqlalchemy import select
from starlette.requests import cookie_parser

from notekeeper.database import Database
from notekeeper.exceptions import StoreError
from notekeeper.models.user import Session, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """The resolved caller of a request."""
    user: User
    session: Session

    @property
    def user_id(self) -> uuid.UUID:
        return self.user.id


class SessionResolver:
    """
    Resolves callers from session tokens.

    Args:
        database:     shared Database handle
        cookie_name:  name of the cookie carrying the session token
    """

    def __init__(self, database: Database, cookie_name: str) -> None:
        self._database = database
        self.cookie_name = cookie_name

    def extract_token(self, headers: Mapping[str, str]) -> Optional[str]:
        """Bearer token first, session cookie second."""
        authorization = headers.get("authorization", "")
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()

        raw_cookie = headers.get("cookie")
        if raw_cookie:
            # Other cookies on the host may be malformed; parse leniently
            token = cookie_parser(raw_cookie).get(self.cookie_name)
            if token:
                return token
        return None

    async def resolve(self, headers: Mapping[str, str]) -> Optional[AuthContext]:
        """
        Look up the caller for `headers`.

        Returns:
            AuthContext for a live session, otherwise None.

        Raises:
            StoreError: the session lookup itself failed.
        """
        token = self.extract_token(headers)
        if token is None:
            return None

        now = datetime.now(timezone.utc)
        try:
            async with self._database.session() as db:
                result = await db.execute(
                    select(Session)
                    .join(User, Session.user_id == User.id)
                    .where(Session.token == token, Session.expires_at > now)
                )
                session = result.unique().scalar_one_or_none()
        except Exception as e:
            logger.error("Session lookup failed: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not resolve session",
                context={"error_type": type(e).__name__},
            ) from e

        if session is None:
            logger.debug("Token did not match a live session")
            return None
        return AuthContext(user=session.user, session=session)
