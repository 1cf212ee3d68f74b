from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base class for domain failures; carries the HTTP status routes answer with."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ServiceError, ValueError):
    """400-level input problem (missing, malformed or out-of-range field)."""


class NotFoundError(ServiceError, LookupError):
    """404-level: resource missing, or not visible to the caller."""

    status_code = 404


def get_json_payload(request) -> dict:
    """
    Return the JSON body as a dict.

    Malformed bodies, missing bodies and non-object JSON all become {} so that
    field validation reports what is missing instead of a parser error.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def clean_text(
    value: Any,
    field: str,
    *,
    message: str | None = None,
    max_length: int | None = None,
) -> str:
    """
    Validate a required free-text field.

    Strips surrounding whitespace; rejects None, non-strings and blank strings.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(message or f"{field} is required")
    cleaned = value.strip()
    if max_length is not None and len(cleaned) > max_length:
        raise InvalidInputError(f"{field} must be at most {max_length} characters")
    return cleaned
