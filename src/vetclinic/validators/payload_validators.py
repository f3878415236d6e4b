import math
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from vetclinic.repositories.registry import NUMERIC_FIELDS, fields_for

INVALID_TABLE_MESSAGE = "Invalid table."
REQUIRED_FIELDS_MESSAGE = "All fields are required. Please fill everything in correctly."


def numeric_field_message(field: str) -> str:
    return f"The field '{field}' must contain only numbers."


def is_missing(value: Any) -> bool:
    """
    A required value is missing when it is absent (None), an empty string, or
    a float NaN. Zero and False are real values.
    """
    if value is None or value == "":
        return True
    return isinstance(value, float) and math.isnan(value)


def is_numeric(value: Any) -> bool:
    """
    True for finite ints/floats/Decimals and for strings that parse as one
    ("12", " 3.50 "). Booleans are not numbers here.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return Decimal(value.strip()).is_finite()
        except InvalidOperation:
            return False
    return False


def validate_payload(table: str, payload: Mapping[str, Any]) -> str | None:
    """
    Pre-flight shape check for create/update payloads.

    Returns a user-facing message for the first problem found, or None when
    the payload is acceptable. Never raises.

    Order of checks:
      1. unknown table
      2. numeric fields (price, stock, age) that are present but not numbers,
         each with its own message
      3. every required field of the table is present and non-empty, one
         shared message for any gap
    """
    required = fields_for(table)
    if required is None:
        return INVALID_TABLE_MESSAGE

    for field in NUMERIC_FIELDS:
        value = payload.get(field)
        if not is_missing(value) and not is_numeric(value):
            return numeric_field_message(field)

    if any(is_missing(payload.get(field)) for field in required):
        return REQUIRED_FIELDS_MESSAGE

    return None


def missing_fields(table: str, payload: Mapping[str, Any]) -> list[str]:
    """Names of required fields the payload lacks, for logging."""
    return [f for f in fields_for(table) or () if is_missing(payload.get(f))]
