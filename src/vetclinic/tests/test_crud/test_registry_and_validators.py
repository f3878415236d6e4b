import math
from decimal import Decimal

import pytest

from vetclinic.repositories.registry import (
    FIELD_SPECS,
    TableName,
    fields_for,
    normalize_table_name,
    resolve_table,
)
from vetclinic.validators.payload_validators import (
    INVALID_TABLE_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    is_missing,
    is_numeric,
    missing_fields,
    numeric_field_message,
    validate_payload,
)


class TestRegistry:

    @pytest.mark.parametrize("raw", ["pets", " pets ", "pets/", "pets//", "  pets/ "])
    def test_resolve_table_normalizes_whitespace_and_trailing_slashes(self, raw):
        assert normalize_table_name(raw) == "pets"
        assert resolve_table(raw) is TableName.PETS

    @pytest.mark.parametrize("raw", ["owners", "users", "PETS", "", None, "pets; drop table pets"])
    def test_resolve_table_rejects_anything_off_the_whitelist(self, raw):
        # `users` exists in the database but is reachable only through auth
        assert resolve_table(raw) is None
        assert fields_for(raw) is None

    def test_field_specs_cover_every_table(self):
        assert set(FIELD_SPECS) == set(TableName)
        assert fields_for("tutors") == ("name",)
        assert fields_for(TableName.APPOINTMENTS) == (
            "tutor_id", "pet_id", "service_id", "datetime", "status",
        )

    def test_field_specs_are_read_only(self):
        with pytest.raises(TypeError):
            FIELD_SPECS[TableName.TUTORS] = ("name", "phone")  # type: ignore[index]


class TestValuePredicates:

    @pytest.mark.parametrize("value", [None, "", float("nan")])
    def test_is_missing_true(self, value):
        assert is_missing(value) is True

    @pytest.mark.parametrize("value", [0, 0.0, False, "0", " ", "x", []])
    def test_is_missing_false_for_real_values(self, value):
        # zero is a real price/stock/age, not an absent one
        assert is_missing(value) is False

    @pytest.mark.parametrize("value", [3, 0, -2, 12.5, Decimal("9.90"), "12", " 3.50 ", "1e3"])
    def test_is_numeric_true(self, value):
        assert is_numeric(value) is True

    @pytest.mark.parametrize(
        "value", ["old", "12abc", "", True, False, math.inf, float("nan"), "NaN", "Infinity", [1], {"a": 1}]
    )
    def test_is_numeric_false(self, value):
        assert is_numeric(value) is False


class TestValidatePayload:

    def test_unknown_table(self):
        assert validate_payload("owners", {"name": "x"}) == INVALID_TABLE_MESSAGE

    def test_tutor_with_only_a_name_is_valid(self):
        assert validate_payload("tutors", {"name": "Ana"}) is None

    def test_tutor_without_name_fails_required_check(self):
        assert validate_payload("tutors", {"phone": "555"}) == REQUIRED_FIELDS_MESSAGE

    def test_non_numeric_age_is_reported_before_missing_fields(self):
        payload = {"name": "Rex", "species": "dog", "breed": "beagle", "age": "old"}
        assert validate_payload("pets", payload) == numeric_field_message("age")

    def test_numeric_fields_are_checked_in_order(self):
        payload = {"name": "Food", "description": "1kg", "price": "cheap", "stock": "many"}
        assert validate_payload("products", payload) == numeric_field_message("price")

    def test_stock_message(self):
        payload = {"name": "Food", "description": "1kg", "price": "10", "stock": "many"}
        assert validate_payload("products", payload) == "The field 'stock' must contain only numbers."

    def test_zero_stock_is_accepted(self):
        payload = {"name": "Food", "description": "1kg", "price": 10, "stock": 0}
        assert validate_payload("products", payload) is None

    def test_empty_string_counts_as_missing(self):
        payload = {"name": "Checkup", "description": "", "price": 50}
        assert validate_payload("services", payload) == REQUIRED_FIELDS_MESSAGE

    def test_numeric_check_ignores_fields_the_payload_lacks(self):
        # a missing price is a required-field problem, not a numeric one
        assert validate_payload("services", {"name": "Checkup", "description": "x"}) == REQUIRED_FIELDS_MESSAGE

    def test_extra_fields_do_not_fail_validation(self):
        payload = {"name": "Ana", "phone": "555", "nickname": "A"}
        assert validate_payload("tutors", payload) is None

    def test_missing_fields_lists_the_gaps(self):
        assert missing_fields("pets", {"name": "Rex", "age": 2}) == ["species", "breed", "tutor_id"]
        assert missing_fields("owners", {}) == []
