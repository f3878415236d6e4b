"""
Classify storage-engine errors into a small, closed set of violation kinds.

Two strategies, tried in order:
  1. Structured: read the SQLSTATE the driver attaches to the exception
     (`sqlstate` on psycopg 3 / asyncpg, `pgcode` on psycopg2).
  2. Text: case-insensitive substring match over the engine's message, first
     match wins. This is the fallback for engines without SQLSTATE (SQLite)
     and for drivers that only give us a string.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ViolationKind(str, Enum):
    FOREIGN_KEY = "foreign_key"
    INVALID_NUMBER = "invalid_number"
    NOT_NULL = "not_null"
    UNIQUE = "unique"
    SYNTAX = "syntax"
    UNKNOWN = "unknown"


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    FOREIGN_KEY_VIOLATION = "23503"
    INVALID_TEXT_REPRESENTATION = "22P02"
    NOT_NULL_VIOLATION = "23502"
    UNIQUE_VIOLATION = "23505"
    SYNTAX_ERROR = "42601"


SQLSTATE_KIND_MAP = {
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ViolationKind.FOREIGN_KEY,
    PostgresErrorCodes.INVALID_TEXT_REPRESENTATION.value: ViolationKind.INVALID_NUMBER,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: ViolationKind.NOT_NULL,
    PostgresErrorCodes.UNIQUE_VIOLATION.value: ViolationKind.UNIQUE,
    PostgresErrorCodes.SYNTAX_ERROR.value: ViolationKind.SYNTAX,
}


# Priority order matters: a message is classified by the first entry that matches.
MESSAGE_KEYWORDS: tuple[tuple[ViolationKind, tuple[str, ...]], ...] = (
    (ViolationKind.FOREIGN_KEY, ("foreign key constraint",)),
    (ViolationKind.INVALID_NUMBER, ("invalid input syntax for type integer",)),
    (ViolationKind.NOT_NULL, ("violates not-null constraint", "not null constraint failed")),
    (ViolationKind.UNIQUE, ("unique constraint",)),
    (ViolationKind.SYNTAX, ("syntax error",)),
)


# =================================================================================================================
# Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in msg for keyword in keywords)


def classify_message(msg: str | None) -> ViolationKind:
    """
    Pure text classifier: the same message always yields the same kind.
    """
    normalized = (msg or "").lower()
    for kind, keywords in MESSAGE_KEYWORDS:
        if _match_any(normalized, keywords):
            return kind
    return ViolationKind.UNKNOWN


def _classify_from_postgres_diag(orig) -> tuple[ViolationKind | None, str | None]:
    """
    Classify a driver exception by its SQLSTATE. Returns (None, None) when the
    exception carries no code or an unmapped one, so the caller can fall back
    to the message text.
    """
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if not sqlstate:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    kind = SQLSTATE_KIND_MAP.get(sqlstate)
    if kind is not None:
        logger.debug(
            "Postgres error diagnostic",
            extra={"sqlstate": sqlstate, "constraint_name": constraint_name},
        )
        return kind, constraint_name

    logger.debug("Unmapped SQLSTATE, falling back to message text", extra={"sqlstate": sqlstate})
    return None, constraint_name


def classify_storage_error(exc: BaseException) -> tuple[ViolationKind, str | None]:
    """
    Classify any exception raised while executing a statement.

    SQLAlchemy wraps driver errors and keeps the original on `.orig`; plain
    exceptions (or wrapped ones without a driver error) are classified by text.

    Returns:
        A tuple of (ViolationKind, constraint name if the engine exposed one)
    """
    orig = getattr(exc, "orig", None)

    if orig is not None:
        kind, constraint_name = _classify_from_postgres_diag(orig)
        if kind is not None:
            return kind, constraint_name
        return classify_message(str(orig)), constraint_name

    return classify_message(str(exc)), None
