"""
NoteKeeper Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for every failure a request can hit.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into JSON error
       responses with the matching HTTP status code.
Who:   Raised by the request validator and the services; caught by handlers.

Exception Hierarchy:
    NoteKeeperError (base)
    ├── ValidationError              → 400 Bad Request
    ├── UnsupportedMediaTypeError    → 415 Unsupported Media Type
    ├── UnauthorizedError            → 401 Unauthorized
    ├── NotFoundError                → 404 Not Found
    └── DatabaseError                → 500 Internal Server Error
        ├── StoreError               (list / get / session lookup)
        ├── CreateFailedError
        ├── UpdateFailedError
        └── DeleteFailedError
"""

from typing import Any, Dict, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client
                  unless the handler opts in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteKeeperError):
    """
    Raised when the request body fails validation.

    When:    A required note field is missing, empty after trimming, or not a
             string; or a JSON body cannot be decoded.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "All fields are required",
            "details": {"required": ["title", "priority", "description"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnsupportedMediaTypeError(NoteKeeperError):
    """
    Raised when the body is neither JSON nor form-encoded.

    HTTP:    415 Unsupported Media Type
    """

    def __init__(
        self,
        content_type: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["content_type"] = content_type
        ctx["supported"] = ["application/json", "application/x-www-form-urlencoded"]
        super().__init__(message="Unsupported content type", context=ctx)
        self.content_type = content_type


class UnauthorizedError(NoteKeeperError):
    """
    Raised when an operation requires a caller identity and none was resolved.

    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NoteKeeperError):
    """
    Raised when a requested resource does not exist or is not visible.

    A note owned by another user is reported exactly like a missing one, so
    the message never distinguishes the two cases.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NoteKeeperError):
    """
    Raised when a database operation fails.

    The message returned to the client is always generic. Driver details
    (SQL, constraint names) are logged server-side only.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(DatabaseError):
    """Reading notes or sessions failed."""

    def __init__(
        self,
        message: str = "Could not fetch notes",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CreateFailedError(DatabaseError):
    """Persisting a new note failed."""

    def __init__(
        self,
        message: str = "Error creating note",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpdateFailedError(DatabaseError):
    """Persisting changes to a note failed."""

    def __init__(
        self,
        message: str = "Error updating note",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DeleteFailedError(DatabaseError):
    """Removing a note failed."""

    def __init__(
        self,
        message: str = "Error deleting note",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
