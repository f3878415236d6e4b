"""
CRUD dispatcher: the public entry point for the generic table endpoints.

Each operation is a short linear pipeline:

    resolve table -> (validate payload) -> one repository statement -> envelope

Failures are raised as `AppError` subclasses (invalid table, validation,
not found, storage) and rendered as failure envelopes by the API's exception
handlers. Unknown tables are rejected before the repository is touched.
"""

import logging
from typing import Any, Mapping

from vetclinic.exceptions.base import (
    InvalidIdentifierError,
    InvalidTableError,
    NotFoundError,
    ValidationFailedError,
)
from vetclinic.repositories.registry import TableName, normalize_table_name, resolve_table
from vetclinic.repositories.table_repository import TableRepository
from vetclinic.schemas.envelope import Envelope, success
from vetclinic.validators.payload_validators import missing_fields, validate_payload

logger = logging.getLogger(__name__)

LIST_MESSAGE = "Records loaded successfully."
CREATE_MESSAGE = "Record created successfully."
UPDATE_MESSAGE = "Record updated successfully."
DELETE_MESSAGE = "Record deleted successfully."

# Largest id any supported engine can store (BIGINT). Larger ids cannot exist.
MAX_IDENTIFIER = 2**63 - 1


def parse_identifier(raw: Any) -> int:
    """Accept 7, '7' or ' 7 '; reject anything that is not a positive integer."""
    if isinstance(raw, bool):
        raise InvalidIdentifierError()
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidIdentifierError()
        value = int(text)
    if value <= 0:
        raise InvalidIdentifierError()
    return value


class CrudDispatcher:
    """
    Stateless orchestration over a TableRepository. One instance per request.
    """

    def __init__(self, repository: TableRepository):
        self.repository = repository

    # --- helpers ---

    @staticmethod
    def _resolve(raw_table: str) -> TableName:
        table = resolve_table(raw_table)
        if table is None:
            logger.info("crud.invalid_table", extra={"table": normalize_table_name(raw_table)})
            raise InvalidTableError()
        return table

    @staticmethod
    def _validate(table: TableName, payload: Mapping[str, Any], operation: str) -> None:
        message = validate_payload(table.value, payload)
        if message:
            logger.info(
                f"crud.{operation}.invalid_payload",
                extra={
                    "table": table.value,
                    "provided_keys": sorted(payload.keys()),
                    "missing_fields": missing_fields(table.value, payload),
                },
            )
            raise ValidationFailedError(message)

    # --- operations ---

    async def list(self, raw_table: str) -> Envelope:
        table = self._resolve(raw_table)
        rows = await self.repository.list_all(table)
        return success(rows, LIST_MESSAGE)

    async def create(self, raw_table: str, payload: Mapping[str, Any]) -> Envelope:
        table = self._resolve(raw_table)
        self._validate(table, payload, "create")

        row = await self.repository.insert(table, payload)
        await self.repository.commit()
        return success(row, CREATE_MESSAGE)

    async def update(self, raw_table: str, raw_id: Any, payload: Mapping[str, Any]) -> Envelope:
        table = self._resolve(raw_table)
        record_id = parse_identifier(raw_id)
        self._validate(table, payload, "update")

        if record_id > MAX_IDENTIFIER:
            raise NotFoundError()
        row = await self.repository.update_by_id(table, record_id, payload)
        if row is None:
            raise NotFoundError()
        await self.repository.commit()
        return success(row, UPDATE_MESSAGE)

    async def delete(self, raw_table: str, raw_id: Any) -> Envelope:
        table = self._resolve(raw_table)
        record_id = parse_identifier(raw_id)

        if record_id > MAX_IDENTIFIER:
            raise NotFoundError()
        deleted = await self.repository.delete_by_id(table, record_id)
        if not deleted:
            raise NotFoundError()
        await self.repository.commit()
        return success(None, DELETE_MESSAGE)
