# vetclinic/exceptions/
# ├── __init__.py
# ├── base.py                    # App-level errors rendered as failure envelopes
# ├── integrity_classifier.py    # Storage error -> ViolationKind (SQLSTATE first, text fallback)
# └── mapper.py                  # ViolationKind -> user message, db_error_handler

from .base import (
    AppError,
    InvalidTableError,
    ValidationFailedError,
    InvalidIdentifierError,
    RepositoryError,
    InvalidFieldError,
    NotFoundError,
    StorageError,
    AuthError,
    EmailNotFoundError,
    WrongPasswordError,
    InvalidTokenError,
)
from .integrity_classifier import ViolationKind, classify_message, classify_storage_error
from .mapper import translate, db_error_handler

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
    "ViolationKind",
    "classify_message",
    "classify_storage_error",
    "translate",
    "db_error_handler",
]
