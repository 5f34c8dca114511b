"""
NoteKeeper Backend - Request Validator
========================================

What:  Extracts and validates title / priority / description from a request.
How:   Picks a body parser from the declared Content-Type (JSON or
       form-encoded), then validates the three fields with NoteInput.
Who:   `note_fields` is a FastAPI dependency of the create and update routes,
       so validation completes before any store access.

Failure modes:
    Content-Type neither JSON nor form  → UnsupportedMediaTypeError (415)
    Undecodable JSON / non-object body  → ValidationError (400)
    Any field missing, empty, non-str   → ValidationError (400), all-or-nothing
"""

import logging
from typing import Any, Mapping

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from notekeeper.exceptions import UnsupportedMediaTypeError, ValidationError
from notekeeper.schemas.note import NoteInput

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"
REQUIRED_FIELDS = ("title", "priority", "description")


def validate_note_fields(payload: Any) -> NoteInput:
    """
    Validate a decoded request body into trimmed note fields.

    Raises:
        ValidationError: naming every required field, whichever one failed.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(
            message="Request body must be an object",
            context={"required": list(REQUIRED_FIELDS)},
        )
    try:
        return NoteInput.model_validate(
            {name: payload.get(name) for name in REQUIRED_FIELDS}
        )
    except PydanticValidationError as e:
        invalid = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        logger.debug("Rejected note fields: %s", invalid)
        raise ValidationError(
            message="All fields are required",
            context={"required": list(REQUIRED_FIELDS), "invalid": invalid},
        )


async def read_note_body(request: Request) -> Any:
    """Decode the request body according to its declared content type."""
    content_type = request.headers.get("content-type", "")

    if JSON_MEDIA_TYPE in content_type:
        try:
            return await request.json()
        except ValueError:
            raise ValidationError(message="Request body is not valid JSON")

    if FORM_MEDIA_TYPE in content_type:
        form = await request.form()
        return dict(form)

    raise UnsupportedMediaTypeError(content_type=content_type)


async def note_fields(request: Request) -> NoteInput:
    """FastAPI dependency: the validated fields of a create/update request."""
    return validate_note_fields(await read_note_body(request))
