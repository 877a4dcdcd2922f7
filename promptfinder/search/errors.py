"""
Error kinds reported by the search boundary.

Only INVALID_ARGUMENT and INTERNAL are raised by the search engine; the other
codes are kept so logs and callers share one vocabulary with the rest of the
service.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(str, Enum):
    # Authentication/Authorization
    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission-denied"

    # Request/input validation
    INVALID_ARGUMENT = "invalid-argument"

    # Data
    NOT_FOUND = "not-found"

    # Operational
    DEADLINE_EXCEEDED = "deadline-exceeded"
    RESOURCE_EXHAUSTED = "resource-exhausted"

    # System
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"

    @property
    def status(self) -> str:
        """Upper-case status name used in the error envelope, e.g. INVALID_ARGUMENT."""
        return self.value.replace("-", "_").upper()


class SearchError(Exception):
    """Base class for errors surfaced at the search boundary."""

    error_type: ErrorType = ErrorType.INTERNAL

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.error_type.status, "message": self.message}


class InvalidArgumentError(SearchError):
    """Malformed or empty query. Safe to retry after correcting the input."""

    error_type = ErrorType.INVALID_ARGUMENT


class InternalError(SearchError):
    """Store unavailable, timed out or returned a malformed response."""

    error_type = ErrorType.INTERNAL


__all__ = ["ErrorType", "SearchError", "InvalidArgumentError", "InternalError"]
