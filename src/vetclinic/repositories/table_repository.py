"""
Repository for the whitelisted CRUD tables.

One instance wraps one AsyncSession (one borrowed pool connection per
request). Every method runs exactly one statement built by `statements.py`
inside `db_error_handler`, so engine failures always surface as a
`StorageError` with a translated message and the session rolled back.

Like the rest of the repository layer it never commits on its own; the
dispatcher calls `commit()` once a write succeeded.
"""

import logging
import time
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from vetclinic.exceptions.mapper import db_error_handler
from vetclinic.repositories.registry import TableName
from vetclinic.repositories.statements import (
    build_delete,
    build_insert,
    build_list,
    build_update,
    coerce_record,
)

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class TableRepository:
    """
    Generic repository over the CRUD whitelist.

    Args:
        db: The async database session, injected per request.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def list_all(self, table: TableName) -> list[Record]:
        async with db_error_handler(self.db, table.value):
            result = await self.db.execute(build_list(table))
            rows = [dict(row) for row in result.mappings().all()]

        logger.debug("repo.list.success", extra={"table": table.value, "count": len(rows)})
        return rows

    # =================================================================================================================
    # Write
    # =================================================================================================================

    async def insert(self, table: TableName, payload: Mapping[str, Any]) -> Record:
        """
        Insert one row and return it as persisted (id and server defaults included).

        Raises:
            InvalidFieldError: payload names a column the table does not have.
            StorageError: the engine rejected the row.
        """
        logger.debug(
            "repo.insert.start",
            extra={"table": table.value, "provided_keys": sorted(payload.keys())},
        )
        record = coerce_record(table, payload)
        start = time.perf_counter()

        async with db_error_handler(self.db, table.value):
            result = await self.db.execute(build_insert(table, record))
            row = dict(result.mappings().one())

        logger.info(
            "repo.insert.success",
            extra={
                "table": table.value,
                "id": row.get("id"),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return row

    async def update_by_id(self, table: TableName, record_id: int,
                           payload: Mapping[str, Any]) -> Record | None:
        """
        Update one row by id. Returns the updated row, or None when no row has
        that id.
        """
        record = coerce_record(table, payload)

        async with db_error_handler(self.db, table.value):
            result = await self.db.execute(build_update(table, record_id, record))
            row = result.mappings().first()

        if row is None:
            logger.info("repo.update.not_found", extra={"table": table.value, "id": record_id})
            return None

        logger.info("repo.update.success", extra={"table": table.value, "id": record_id})
        return dict(row)

    async def delete_by_id(self, table: TableName, record_id: int) -> bool:
        """
        Delete one row by id. Returns False when no row has that id.
        """
        async with db_error_handler(self.db, table.value):
            result = await self.db.execute(build_delete(table, record_id))
            deleted = result.first() is not None

        if not deleted:
            logger.info("repo.delete.not_found", extra={"table": table.value, "id": record_id})
            return False

        logger.info("repo.delete.success", extra={"table": table.value, "id": record_id})
        return True

    # =================================================================================================================
    # Transaction control
    # =================================================================================================================

    async def commit(self) -> None:
        # Deferred constraints are checked at commit time, so this can fail too.
        async with db_error_handler(self.db):
            await self.db.commit()
