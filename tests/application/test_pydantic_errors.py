"""Tests for pydantic error rendering shared by the loaders."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from welfare_assessment.application.pydantic_errors import format_validation_error


class _Household(BaseModel):
    size: int
    members: list[str]


def _validation_error(payload: str) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        _Household.model_validate_json(payload)
    return exc_info.value


def test_reports_first_error_with_dotted_location() -> None:
    error = _validation_error('{"size": 2, "members": ["Amina", 7]}')

    assert format_validation_error(error) == "members.1: Input should be a valid string"


def test_reports_root_for_unparseable_documents() -> None:
    error = _validation_error("{")

    assert format_validation_error(error).startswith("<root>: ")
