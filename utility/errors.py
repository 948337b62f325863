# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-12
# Description: errors.py
# -----------------------------------------------------------------------------
from typing import Any, Dict


class ScriptSearchError(Exception):
    """
    Base error for the retrieval engine.

    Carries a machine-readable code, a retryable flag and a short message that
    is safe to show to an end user. Callers decide retry/backoff from
    `retryable` alone.
    """
    code: str = "SCRIPT_SEARCH_ERROR"
    retryable: bool = False
    default_user_message: str = "Something went wrong while searching the script"

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.user_message = user_message or self.default_user_message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.user_message,
            "retryable": self.retryable,
        }


class ServiceError(ScriptSearchError):
    """Embedding provider or object store listing failed. Safe to retry."""
    code = "SERVICE_ERROR"
    retryable = True
    default_user_message = "Service temporarily unavailable"


class ValidationError(ScriptSearchError):
    """Invalid search options."""
    code = "VALIDATION_ERROR"
    retryable = False
    default_user_message = "Invalid input provided"


class DimensionMismatchError(ScriptSearchError, ValueError):
    """Two vectors that must be compared have different lengths."""
    code = "DIMENSION_MISMATCH"
    retryable = False
    default_user_message = "Embedding dimensionality is inconsistent"

    def __init__(self, expected: int, actual: int, *, message: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"Vector dimension mismatch: expected {expected}, got {actual}")
