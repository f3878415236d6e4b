"""
Repository layer.

    from vetclinic.repositories import TableRepository, UserRepository, TableName
"""

from .registry import TableName, FIELD_SPECS, fields_for, resolve_table
from .table_repository import TableRepository
from .user_repository import UserRepository

__all__ = [
    "TableName",
    "FIELD_SPECS",
    "fields_for",
    "resolve_table",
    "TableRepository",
    "UserRepository",
]
