import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import ViolationKind, classify_message, classify_storage_error
from .base import AppError, StorageError

logger = logging.getLogger(__name__)


# User-facing text per violation kind. Written for clinic staff, never includes
# raw engine output.
VIOLATION_MESSAGES: dict[ViolationKind, str] = {
    ViolationKind.FOREIGN_KEY: "The related item does not exist (check the tutor, pet or service).",
    ViolationKind.INVALID_NUMBER: "A numeric field received text. Enter numbers only.",
    ViolationKind.NOT_NULL: "A required field was not filled in.",
    ViolationKind.UNIQUE: "A record with this data already exists.",
    ViolationKind.SYNTAX: "Syntax error in the request (incorrect field or value).",
    ViolationKind.UNKNOWN: "Unexpected server error. Check the data and try again.",
}


def message_for(kind: ViolationKind) -> str:
    return VIOLATION_MESSAGES[kind]


def translate(raw_message: str | None) -> str:
    """
    Map raw storage-engine error text to the user-facing message.

    Pure function over the text: independent of table or operation.
    """
    return message_for(classify_message(raw_message))


def raise_mapped_storage_error(exc: BaseException, table: str | None = None) -> None:
    """
    Classify a storage exception and raise the matching StorageError.
    """
    kind, constraint_name = classify_storage_error(exc)
    table_part = table or "database"

    if kind is ViolationKind.UNKNOWN:
        # Unclassified failures are worth a stack trace; raw text stays at DEBUG.
        logger.warning(
            "mapper.unknown_storage_error",
            extra={"table": table_part, "constraint": constraint_name},
            exc_info=exc,
        )
        raw = str(getattr(exc, "orig", None) or exc)
        logger.debug("mapper.unknown_storage_error_raw", extra={"table": table_part, "raw": raw})
    else:
        # Constraint violations are expected client-level scenarios
        logger.info(
            "mapper.storage_violation",
            extra={"table": table_part, "kind": kind.value, "constraint": constraint_name},
        )

    raise StorageError(message_for(kind), kind=kind, constraint=constraint_name) from exc


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, table: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, table):
            ... one statement that may fail inside the engine ...

    Rolls the session back on failure and raises a StorageError carrying the
    translated message. AppErrors raised inside the block pass through.
    """
    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        try:
            await db.rollback()
        except Exception:
            logger.exception("Failed to rollback session after storage error", extra={"table": table})
        raise_mapped_storage_error(exc, table)
