"""
Domain errors raised by the stores and the auth layer.

Each error knows the HTTP status and error code it maps to; the handlers in
``responses`` turn them into JSON bodies.
"""
from typing import Any, Dict, Optional


class MailmasterError(Exception):
    """Base class for every error surfaced to API callers."""

    status_code = 500
    error_code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(MailmasterError):
    """Malformed, missing or conflicting input."""

    status_code = 422
    error_code = "VALIDATION_ERROR"
    default_message = "The given data was invalid"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, {"field": field})


class AuthenticationError(MailmasterError):
    """Bad credentials, or a missing, invalid or revoked token."""

    status_code = 401
    error_code = "UNAUTHORIZED"
    default_message = "Not authenticated"


class NotFoundError(MailmasterError):
    """Record absent or owned by someone else. Callers cannot tell which."""

    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource not found"

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")
        self.resource = resource


class ServerError(MailmasterError):
    """Unexpected storage failure."""
