"""
Schema registry: the closed whitelist of CRUD tables and the fields each one
requires on create/update.

This is the only trust boundary for the dynamic statements built in
`statements.py`: a table name from the URL is first normalized, then looked up
here, and only a `TableName` member ever reaches SQL. The mapping is frozen at
import time.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class TableName(str, Enum):
    PETS = "pets"
    TUTORS = "tutors"
    SERVICES = "services"
    PRODUCTS = "products"
    APPOINTMENTS = "appointments"


FIELD_SPECS: Mapping[TableName, tuple[str, ...]] = MappingProxyType({
    TableName.PETS: ("name", "species", "breed", "age", "tutor_id"),
    TableName.TUTORS: ("name",),
    TableName.SERVICES: ("name", "description", "price"),
    TableName.PRODUCTS: ("name", "description", "price", "stock"),
    TableName.APPOINTMENTS: ("tutor_id", "pet_id", "service_id", "datetime", "status"),
})

# Fields that must look like numbers whenever a payload carries them.
NUMERIC_FIELDS: tuple[str, ...] = ("price", "stock", "age")


def normalize_table_name(raw: str | None) -> str:
    """Trim whitespace and trailing slashes: ' pets// ' -> 'pets'."""
    return (raw or "").strip().rstrip("/")


def resolve_table(raw: str | None) -> TableName | None:
    """Map a raw table name onto the whitelist, or None when it is not on it."""
    try:
        return TableName(normalize_table_name(raw))
    except ValueError:
        return None


def fields_for(table: str | TableName | None) -> tuple[str, ...] | None:
    resolved = table if isinstance(table, TableName) else resolve_table(table)
    if resolved is None:
        return None
    return FIELD_SPECS[resolved]
