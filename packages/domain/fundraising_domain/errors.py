"""Structured errors raised by the fundraising domain's outer layers.

The allocation calculator and the export formatters never raise these: they
perform no validation and let NaN/infinity propagate. Everything that sits
in front of them (the allocation service, lifecycle rules, the CLI) raises a
``FundraisingError`` subclass carrying an HTTP-style status code and a
stable error code, so an API layer can turn it into a response envelope
without inspecting messages.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCodes(str, Enum):
    """Standard error codes shared with the API response envelope."""

    # Auth errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Permission errors (403)
    FORBIDDEN = "FORBIDDEN"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # Resource errors (404)
    NOT_FOUND = "NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Business logic errors (409)
    CONFLICT = "CONFLICT"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    INVALID_STATE = "INVALID_STATE"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class FundraisingError(Exception):
    """Base class for domain errors with a status code and error code."""

    default_status_code = 500
    default_code = ErrorCodes.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[ErrorCodes] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.code = code if code is not None else self.default_code
        self.details = details

    def to_response(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Build the standard error envelope for this error.

        Args:
            now: Timestamp for the envelope metadata (default: current UTC time)

        Returns:
            Dict with ``success``, ``error`` and ``metadata`` keys
        """
        timestamp = now or datetime.now(timezone.utc)
        return {
            "success": False,
            "error": {
                "message": self.message,
                "code": ErrorCodes(self.code).value,
                "details": self.details,
            },
            "metadata": {"timestamp": timestamp.isoformat()},
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, status_code={self.status_code}, code={ErrorCodes(self.code).value})"


class DomainValidationError(FundraisingError):
    """Raised when caller-supplied input fails a business rule."""

    default_status_code = 400
    default_code = ErrorCodes.VALIDATION_ERROR


class ForbiddenError(FundraisingError):
    """Raised when an actor touches a resource it does not own."""

    default_status_code = 403
    default_code = ErrorCodes.FORBIDDEN


class NotFoundError(FundraisingError):
    """Raised when a referenced entity does not exist."""

    default_status_code = 404
    default_code = ErrorCodes.NOT_FOUND


class InvalidStateError(FundraisingError):
    """Raised when a status transition is not allowed from the current state."""

    default_status_code = 409
    default_code = ErrorCodes.INVALID_STATE
