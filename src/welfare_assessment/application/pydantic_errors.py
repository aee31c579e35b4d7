"""Shared rendering of pydantic validation failures for loader error messages."""

from __future__ import annotations

from pydantic import ValidationError


def format_validation_error(exc: ValidationError) -> str:
    """Render the first error as ``dotted.location: message``."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"
