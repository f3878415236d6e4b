"""
Logging filters.

- RequestIdFilter: stamps every LogRecord with `request_id`, read from a
  contextvar that RequestIDMiddleware sets per HTTP request. Contextvars follow
  the request across awaits, which threading.local() would not. Records logged
  outside a request get the sentinel "-", so `%(request_id)s` never KeyErrors.
- RedactFilter: masks record attributes whose name looks like a credential
  (password, token, ...), so an `extra={"password": ...}` slip never reaches
  a handler.
"""

import logging
from logging import LogRecord
import contextvars

# Request id for the current execution context (None when no request is active).
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee a `request_id` attribute on every record:
    explicit `extra={"request_id": ...}` > contextvar > "-".
    Always returns True; it only annotates.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "hashed_password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "jwt_secret",
    }
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
