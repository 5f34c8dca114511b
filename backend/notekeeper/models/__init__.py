# Importing the models registers their tables on Base.metadata
from notekeeper.models.note import Note
from notekeeper.models.user import ROLE_ADMIN, ROLE_USER, Session, User

__all__ = ["Note", "Session", "User", "ROLE_ADMIN", "ROLE_USER"]
