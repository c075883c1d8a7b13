"""Typed error raised by the PhysioFlow API client."""

from __future__ import annotations

from typing import Any, Optional


class ApiError(Exception):
    """An API request failed.

    ``status`` is the HTTP status code, or 0 when no response was received.
    """

    def __init__(
        self,
        message: str,
        status: int,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details

    @property
    def is_network_error(self) -> bool:
        return self.status == 0

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, code={self.code!r}, message={self.message!r})"


def is_api_error(error: object) -> bool:
    """Type guard used by callers that catch broadly."""
    return isinstance(error, ApiError)
