"""Turn pydantic ValidationErrors into VALIDATION_ERROR tool responses."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from models.errors import ToolError, create_validation_error

_VALUE_ERROR_PREFIX = "Value error, "


def _field_name(loc: tuple[Any, ...]) -> str:
    # records.3.cohortYear
    return ".".join(str(part) for part in loc if part != "__root__")


def describe_validation_error(error: ValidationError) -> str:
    """
    Describe the first issue pydantic reported.

    Field-level issues read ``Invalid <field>: <message>``; model-level
    issues keep only the message. Messages from custom validators lose
    pydantic's "Value error, " prefix.
    """
    issues = error.errors()
    if not issues:
        return "Invalid input"

    issue = issues[0]
    message = issue.get("msg", "Invalid input").removeprefix(_VALUE_ERROR_PREFIX)
    field = _field_name(issue.get("loc", ()))
    return f"Invalid {field}: {message}" if field else message


def map_pydantic_validation_error(error: ValidationError) -> ToolError:
    """Wrap a ValidationError as a non-retryable ToolError."""
    return create_validation_error(describe_validation_error(error))
