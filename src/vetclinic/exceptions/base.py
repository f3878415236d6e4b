"""
Application-level exceptions.

Every failure a request can hit is raised as an `AppError` subclass and turned
into the uniform failure envelope by the FastAPI handlers in
`vetclinic.api.v1.error_handlers`:

    {"success": false, "message": "<human-friendly text>", "data": null}

Messages are written for clinic staff, not developers: they never contain raw
database text, constraint names or SQL.
"""

from typing import Iterable

from .integrity_classifier import ViolationKind


class AppError(Exception):
    """
    Base exception for errors that end up in a failure envelope.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (logs only)
    - error_code: canonical short code used for logging and HTTP status lookup
    """

    # Map canonical error_code -> HTTP status. Anything unlisted is a 400.
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "unauthorized": 401,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message

    def to_payload(self) -> dict:
        """
        Return the failure envelope for this error. The shape never varies, so
        clients can always read `success` and `message`.
        """
        return {"success": False, "message": self.message, "data": None}

    def http_status(self) -> int:
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


# -----------------------
# Input rejection (detected before touching storage)
# -----------------------

class InvalidTableError(AppError):
    def __init__(self, message: str = "Invalid table."):
        super().__init__(message, error_code="invalid_table")


class ValidationFailedError(AppError):
    """Payload failed the pre-flight shape checks."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_input")


class InvalidIdentifierError(AppError):
    def __init__(self, message: str = "The record identifier must be a positive integer."):
        super().__init__(message, error_code="invalid_identifier")


# -----------------------
# Repository / storage errors
# -----------------------

class RepositoryError(AppError):
    """Base for errors raised by the repository layer."""


class InvalidFieldError(RepositoryError):
    """Raised when the payload names columns the table does not have."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Record not found."):
        super().__init__(message, error_code="not_found")


class StorageError(RepositoryError):
    """
    A statement failed inside the storage engine. `kind` is the classified
    violation; `constraint` is the engine's constraint name when it exposes
    one (logs only, never sent to clients).
    """

    def __init__(self, message: str, *, kind: ViolationKind,
                 constraint: str | None = None, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code=f"storage_{kind.value}")
        self.kind = kind
        self.constraint = constraint


# -----------------------
# Auth errors
# -----------------------

class AuthError(AppError):
    """Base for authentication failures."""


class EmailNotFoundError(AuthError):
    def __init__(self, message: str = "Email not found."):
        super().__init__(message, error_code="email_not_found")


class WrongPasswordError(AuthError):
    def __init__(self, message: str = "Wrong password."):
        super().__init__(message, error_code="wrong_password")


class InvalidTokenError(AuthError):
    def __init__(self, message: str = "Invalid or expired token."):
        super().__init__(message, error_code="unauthorized")


__all__ = [
    "AppError",
    "InvalidTableError",
    "ValidationFailedError",
    "InvalidIdentifierError",
    "RepositoryError",
    "InvalidFieldError",
    "NotFoundError",
    "StorageError",
    "AuthError",
    "EmailNotFoundError",
    "WrongPasswordError",
    "InvalidTokenError",
]
