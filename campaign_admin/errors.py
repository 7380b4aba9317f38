from __future__ import annotations

from typing import Iterable

import pydantic


class ValidationError(Exception):
    """Rejected input. ``errors`` is a list of ``{"field", "message"}`` dicts."""

    def __init__(self, errors: list[dict], message: str = "Validation error"):
        super().__init__(message)
        self.message = message
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        return cls(list(_field_errors(exc.errors())))


class NotFoundError(Exception):
    def __init__(self, message: str = "Not found"):
        super().__init__(message)
        self.message = message


def _field_errors(raw: Iterable[dict]):
    for err in raw:
        loc = ".".join(str(part) for part in err.get("loc", ()))
        yield {"field": loc or "body", "message": err.get("msg", "Invalid value")}
