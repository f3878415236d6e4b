"""
Statement builder: parameterized list / insert / update / delete statements
for the whitelisted tables.

Column lists come from the payload itself, not from the required-field list,
so any extra column the caller sends is persisted too. Table objects are only
ever looked up through a `TableName`, never from free-form input, and every
value is a bound parameter.
"""

import datetime as dt
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from sqlalchemy import DateTime, Integer, Numeric, Table, delete, insert, select, update
from sqlalchemy.sql import Delete, Insert, Select, Update

from vetclinic.database.base import Base
from vetclinic.exceptions.base import InvalidFieldError, ValidationFailedError
from vetclinic.repositories.registry import TableName
from vetclinic.validators.payload_validators import numeric_field_message
import vetclinic.models  # noqa: F401 - registers tables on Base.metadata

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def get_table(table: TableName) -> Table:
    return Base.metadata.tables[table.value]


# -----------------------
# Value coercion
# -----------------------

def _coerce_value(column_type, value: Any) -> Any:
    """
    Convert a JSON value to the column's Python type when that is lossless.

    Integer columns only take whole numbers; anything else raises ValueError.
    Other unconvertible values are returned untouched; the storage engine then
    rejects them and the error translator reports it.
    """
    if value is None or isinstance(value, bool):
        return value

    if isinstance(column_type, Integer):
        if isinstance(value, int):
            return value
        if isinstance(value, str) and _INTEGER_RE.match(value.strip()):
            return int(value.strip())
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ValueError(f"not a whole number: {type(value).__name__}")

    if isinstance(column_type, Numeric):
        if isinstance(value, (str, int, float)):
            try:
                return Decimal(str(value).strip())
            except InvalidOperation:
                return value
        return value

    if isinstance(column_type, DateTime) and isinstance(value, str):
        try:
            # accepts a trailing 'Z' for UTC
            return dt.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return value

    return value


def coerce_record(table: TableName, payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return a copy of `payload` with values converted to their column types,
    preserving key order.

    Raises:
        InvalidFieldError: if the payload names columns the table does not have.
        ValidationFailedError: if an integer column gets a fractional or non-numeric value.
    """
    columns = get_table(table).c
    unknown = [key for key in payload if key not in columns]
    if unknown:
        raise InvalidFieldError(
            f"Unknown field(s) for {table.value}: {', '.join(unknown)}", fields=unknown
        )
    record: dict[str, Any] = {}
    for key, value in payload.items():
        try:
            record[key] = _coerce_value(columns[key].type, value)
        except ValueError:
            raise ValidationFailedError(numeric_field_message(key), fields=[key]) from None
    return record


# -----------------------
# Builders
# -----------------------

def build_list(table: TableName) -> Select:
    """
    SELECT every row, newest first.

    Appointments are the one exception: their ids are resolved to display
    names through outer joins, so dangling references come back as NULL names
    instead of dropping the row.
    """
    if table is TableName.APPOINTMENTS:
        a = get_table(TableName.APPOINTMENTS)
        t = get_table(TableName.TUTORS)
        p = get_table(TableName.PETS)
        s = get_table(TableName.SERVICES)
        return (
            select(
                a.c.id,
                t.c.name.label("tutor_name"),
                p.c.name.label("pet_name"),
                s.c.name.label("service_name"),
                a.c.datetime,
                a.c.status,
            )
            .select_from(
                a.outerjoin(t, a.c.tutor_id == t.c.id)
                .outerjoin(p, a.c.pet_id == p.c.id)
                .outerjoin(s, a.c.service_id == s.c.id)
            )
            .order_by(a.c.id.desc())
        )

    target = get_table(table)
    return select(target).order_by(target.c.id.desc())


def build_insert(table: TableName, record: Mapping[str, Any]) -> Insert:
    target = get_table(table)
    return insert(target).values(**record).returning(*target.c)


def build_update(table: TableName, record_id: int, record: Mapping[str, Any]) -> Update:
    target = get_table(table)
    return (
        update(target)
        .where(target.c.id == record_id)
        .values(**record)
        .returning(*target.c)
    )


def build_delete(table: TableName, record_id: int) -> Delete:
    target = get_table(table)
    return delete(target).where(target.c.id == record_id).returning(target.c.id)
