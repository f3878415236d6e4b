import datetime as dt
from decimal import Decimal

import pytest

from vetclinic.exceptions.base import InvalidFieldError, ValidationFailedError
from vetclinic.repositories.registry import TableName
from vetclinic.repositories.statements import build_list, coerce_record, get_table
from vetclinic.validators.payload_validators import numeric_field_message


def test_every_whitelisted_table_is_registered():
    for table in TableName:
        assert get_table(table).name == table.value


class TestCoerceRecord:

    def test_numeric_strings_become_column_types(self):
        record = coerce_record(TableName.PRODUCTS, {"name": "Food", "price": "12.50", "stock": " 3 "})
        assert record == {"name": "Food", "price": Decimal("12.50"), "stock": 3}

    def test_integral_float_becomes_int(self):
        assert coerce_record(TableName.PETS, {"age": 4.0}) == {"age": 4}

    def test_unconvertible_values_pass_through(self):
        # the storage engine rejects these and the translator reports them
        record = coerce_record(TableName.SERVICES, {"price": "cheap"})
        assert record == {"price": "cheap"}

    @pytest.mark.parametrize(
        "table, payload, field",
        [
            (TableName.PETS, {"age": 3.7}, "age"),
            (TableName.PRODUCTS, {"stock": "3.5"}, "stock"),
            (TableName.PETS, {"tutor_id": "abc"}, "tutor_id"),
            (TableName.APPOINTMENTS, {"pet_id": [1]}, "pet_id"),
        ],
    )
    def test_integer_columns_reject_non_whole_numbers(self, table, payload, field):
        with pytest.raises(ValidationFailedError) as exc_info:
            coerce_record(table, payload)

        assert exc_info.value.message == numeric_field_message(field)
        assert exc_info.value.fields == [field]

    def test_iso_datetime_with_z_suffix(self):
        record = coerce_record(TableName.APPOINTMENTS, {"datetime": "2024-05-01T10:30:00Z"})
        assert record["datetime"] == dt.datetime(2024, 5, 1, 10, 30, tzinfo=dt.timezone.utc)

    def test_preserves_key_order(self):
        payload = {"status": "done", "pet_id": "2", "tutor_id": "1"}
        assert list(coerce_record(TableName.APPOINTMENTS, payload)) == ["status", "pet_id", "tutor_id"]

    def test_unknown_columns_are_rejected(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            coerce_record(TableName.TUTORS, {"name": "Ana", "nickname": "A", "age": 3})

        assert exc_info.value.fields == ["nickname", "age"]
        assert exc_info.value.http_status() == 400


class TestBuildList:

    def test_appointments_project_display_names(self):
        stmt = build_list(TableName.APPOINTMENTS)
        assert [c.name for c in stmt.selected_columns] == [
            "id", "tutor_name", "pet_name", "service_name", "datetime", "status",
        ]
        assert "LEFT OUTER JOIN" in str(stmt)

    def test_other_tables_select_every_column(self):
        stmt = build_list(TableName.PRODUCTS)
        assert [c.name for c in stmt.selected_columns] == [
            c.name for c in get_table(TableName.PRODUCTS).c
        ]
        assert "ORDER BY products.id DESC" in str(stmt)
