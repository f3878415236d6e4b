import pytest

from vetclinic.exceptions.base import (
    InvalidIdentifierError,
    InvalidTableError,
    NotFoundError,
    ValidationFailedError,
)
from vetclinic.repositories.registry import TableName
from vetclinic.services.crud_dispatcher import (
    CREATE_MESSAGE,
    DELETE_MESSAGE,
    LIST_MESSAGE,
    MAX_IDENTIFIER,
    UPDATE_MESSAGE,
    CrudDispatcher,
    parse_identifier,
)
from vetclinic.validators.payload_validators import REQUIRED_FIELDS_MESSAGE, numeric_field_message

from ..test_fixtures.crud_fixtures import StubTableRepository


class TestParseIdentifier:

    @pytest.mark.parametrize("raw, expected", [(7, 7), ("7", 7), (" 42 ", 42)])
    def test_accepts_positive_integers(self, raw, expected):
        assert parse_identifier(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "-3", "0", 0, "", None, True, "1e3"])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidIdentifierError):
            parse_identifier(raw)


class TestUnknownTableNeverTouchesStorage:
    """Every operation resolves the table first; nothing reaches the repository otherwise."""

    async def test_list(self, stub_dispatcher: CrudDispatcher, stub_repository: StubTableRepository):
        with pytest.raises(InvalidTableError) as exc_info:
            await stub_dispatcher.list("owners")

        assert exc_info.value.message == "Invalid table."
        assert stub_repository.calls == []

    async def test_create(self, stub_dispatcher, stub_repository):
        with pytest.raises(InvalidTableError):
            await stub_dispatcher.create("owners", {"name": "x"})
        assert stub_repository.calls == []

    async def test_update_checks_table_before_identifier(self, stub_dispatcher, stub_repository):
        with pytest.raises(InvalidTableError):
            await stub_dispatcher.update("owners", "not-a-number", {"name": "x"})
        assert stub_repository.calls == []

    async def test_delete(self, stub_dispatcher, stub_repository):
        with pytest.raises(InvalidTableError):
            await stub_dispatcher.delete("users", 1)
        assert stub_repository.calls == []
        assert stub_repository.commits == 0


class TestDispatcherWithStub:

    async def test_list_wraps_rows_in_envelope(self):
        repo = StubTableRepository(rows=[{"id": 1, "name": "A"}, {"id": 2, "name": "B"}])
        envelope = await CrudDispatcher(repo).list(" tutors/ ")

        assert envelope.success is True
        assert envelope.message == LIST_MESSAGE
        assert [r["id"] for r in envelope.data] == [2, 1]
        assert repo.calls == [("list_all", TableName.TUTORS)]

    async def test_create_commits_and_returns_row(self, stub_dispatcher, stub_repository):
        envelope = await stub_dispatcher.create("tutors", {"name": "Ana"})

        assert envelope.success is True
        assert envelope.message == CREATE_MESSAGE
        assert envelope.data == {"id": 1, "name": "Ana"}
        assert stub_repository.commits == 1

    async def test_create_validation_failure_skips_storage(self, stub_dispatcher, stub_repository):
        payload = {"name": "Rex", "species": "dog", "breed": "beagle", "age": "old"}

        with pytest.raises(ValidationFailedError) as exc_info:
            await stub_dispatcher.create("pets", payload)

        assert exc_info.value.message == numeric_field_message("age")
        assert stub_repository.calls == []

    async def test_update_invalid_identifier(self, stub_dispatcher, stub_repository):
        with pytest.raises(InvalidIdentifierError):
            await stub_dispatcher.update("tutors", "abc", {"name": "Ana"})
        assert stub_repository.calls == []

    async def test_update_missing_row_is_not_found(self, stub_dispatcher, stub_repository):
        with pytest.raises(NotFoundError) as exc_info:
            await stub_dispatcher.update("tutors", "999", {"name": "Ana"})

        assert exc_info.value.http_status() == 404
        assert stub_repository.commits == 0

    async def test_update_validates_like_create(self, stub_dispatcher, stub_repository):
        with pytest.raises(ValidationFailedError) as exc_info:
            await stub_dispatcher.update("tutors", 1, {"phone": "555"})

        assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE
        assert stub_repository.calls == []

    async def test_update_success(self):
        repo = StubTableRepository(rows=[{"id": 3, "name": "Ana"}])
        envelope = await CrudDispatcher(repo).update("tutors", "3", {"name": "Ana Paula"})

        assert envelope.message == UPDATE_MESSAGE
        assert envelope.data == {"id": 3, "name": "Ana Paula"}
        assert repo.commits == 1

    async def test_delete_twice(self):
        repo = StubTableRepository(rows=[{"id": 5, "name": "Ana"}])
        dispatcher = CrudDispatcher(repo)

        envelope = await dispatcher.delete("tutors", 5)
        assert envelope.success is True
        assert envelope.message == DELETE_MESSAGE
        assert envelope.data is None

        with pytest.raises(NotFoundError):
            await dispatcher.delete("tutors", 5)
        assert repo.commits == 1

    async def test_identifier_beyond_storage_range_is_not_found(self, stub_dispatcher, stub_repository):
        with pytest.raises(NotFoundError):
            await stub_dispatcher.delete("products", "99999999999999999999")
        with pytest.raises(NotFoundError):
            await stub_dispatcher.update("tutors", str(MAX_IDENTIFIER + 1), {"name": "Ana"})

        assert stub_repository.calls == []

    async def test_largest_storable_identifier_reaches_storage(self, stub_dispatcher, stub_repository):
        with pytest.raises(NotFoundError):
            await stub_dispatcher.delete("products", str(MAX_IDENTIFIER))

        assert len(stub_repository.calls) == 1


class TestDispatcherWithDatabase:

    async def test_create_then_list(self, real_dispatcher: CrudDispatcher):
        created = await real_dispatcher.create("services", {"name": "Bath", "description": "wash", "price": "35.5"})
        listed = await real_dispatcher.list("services")

        assert listed.data[0]["id"] == created.data["id"]
        assert listed.data[0]["name"] == "Bath"

    async def test_update_missing_row(self, real_dispatcher: CrudDispatcher):
        with pytest.raises(NotFoundError):
            await real_dispatcher.update("tutors", 999, {"name": "Nobody"})
