"""
NoteKeeper Backend - Request Validator Unit Tests
===================================================

What:  validate_note_fields on decoded bodies (no HTTP involved).
"""

import pytest

from notekeeper.exceptions import ValidationError
from notekeeper.validation import REQUIRED_FIELDS, validate_note_fields


class TestValidateNoteFields:

    def test_trims_every_field(self):
        result = validate_note_fields(
            {"title": "  A  ", "priority": "\thigh\n", "description": " d "}
        )

        assert (result.title, result.priority, result.description) == ("A", "high", "d")

    def test_inner_whitespace_and_case_are_preserved(self):
        result = validate_note_fields(
            {"title": " Buy  MILK ", "priority": "High", "description": "<b>x</b>"}
        )

        assert result.title == "Buy  MILK"
        assert result.priority == "High"
        assert result.description == "<b>x</b>"

    def test_extra_fields_are_ignored(self):
        result = validate_note_fields(
            {"title": "t", "priority": "p", "description": "d", "ownerId": "someone"}
        )

        assert not hasattr(result, "ownerId")

    @pytest.mark.parametrize("missing", REQUIRED_FIELDS)
    def test_any_missing_field_names_all_three(self, missing):
        payload = {"title": "t", "priority": "p", "description": "d"}
        del payload[missing]

        with pytest.raises(ValidationError) as exc_info:
            validate_note_fields(payload)

        assert exc_info.value.message == "All fields are required"
        assert exc_info.value.context["required"] == list(REQUIRED_FIELDS)
        assert exc_info.value.context["invalid"] == [missing]

    def test_non_string_values_are_rejected(self):
        with pytest.raises(ValidationError):
            validate_note_fields({"title": 1, "priority": "p", "description": "d"})
        with pytest.raises(ValidationError):
            validate_note_fields({"title": ["t"], "priority": "p", "description": "d"})

    @pytest.mark.parametrize("payload", [None, [], "title=t", 3])
    def test_non_object_bodies_are_rejected(self, payload):
        with pytest.raises(ValidationError):
            validate_note_fields(payload)
