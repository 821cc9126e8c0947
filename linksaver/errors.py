"""Error types raised by the auth and bookmark endpoints.

Each carries the HTTP status it maps to; ``create_app`` renders them as
``{"error": message}``.
"""

from __future__ import annotations


class LinkSaverError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LinkSaverError):
    """Raised when a request body is missing fields or has malformed values."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(LinkSaverError):
    """Raised for bad credentials and for missing, expired or forged tokens."""

    status_code = 401
    default_message = "Unauthorized"


class ConflictError(LinkSaverError):
    """Raised when registration hits an email that is already taken."""

    status_code = 409
    default_message = "Registration failed"
