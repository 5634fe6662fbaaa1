from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def error_body(code: str, message: str, details: Optional[Dict[str, Any]] = None, request_id: str | None = None) -> Dict[str, Any]:
    """The ``{"error": {...}}`` envelope every JSON error response uses."""
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "request_id": request_id,
        }
    }


@dataclass
class ApiError(Exception):
    """Raise from a loader or route to answer with a JSON error.

    ``log_level`` is the level the app logs the error at.
    """

    status_code: int
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    log_level: int = logging.INFO

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self, request_id: str | None = None) -> Dict[str, Any]:
        return error_body(self.code, self.message, self.details, request_id)


class CollectionNotFound(ApiError):
    """The storefront has no collection for the requested handle."""

    def __init__(self, handle: str):
        super().__init__(
            status_code=404,
            code="not_found",
            message=f"Collection {handle} not found",
            details={"handle": handle},
        )


class InvalidFilterError(ApiError):
    """A filter query parameter carried a value that cannot be sent upstream."""

    def __init__(self, parameter: str, value: str, reason: str = "must be a finite number"):
        super().__init__(
            status_code=400,
            code="invalid_filter",
            message=f"Filter {parameter} {reason}",
            details={"parameter": parameter, "value": value},
        )


class RedirectRequired(Exception):
    """Navigational correction: the page cannot be served at this URL.

    Not an error; the app turns it into a 302 to ``location``.
    """

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location

