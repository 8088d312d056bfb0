"""Error types and helpers for standardized error responses."""
from typing import Any


class ValidationError(ValueError):
    """Client input is missing or malformed; rendered as HTTP 400."""


class ConflictError(Exception):
    """A record with the same identifier already exists."""


def error_response(message: str) -> dict[str, Any]:
    """Return a standardized error payload."""

    return {"success": False, "error": message}


__all__ = ["ValidationError", "ConflictError", "error_response"]
