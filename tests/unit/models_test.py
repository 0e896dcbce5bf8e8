"""Unit tests for the resource schema models."""

import pytest
from pydantic import ValidationError

from aepc.models import FieldSchema, Method, ResourceSchema, ScalarType, ServiceConfig, resolve_scalar_type


class TestFieldSchemaModel:
    def test_creates_field_with_valid_data(self) -> None:
        f = FieldSchema(name="isbn", type="string", number=3)
        assert f.name == "isbn"
        assert f.number == 3

    def test_field_number_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            FieldSchema(name="isbn", type="string", number=0)

    def test_field_is_frozen(self) -> None:
        f = FieldSchema(name="isbn", type="string", number=3)
        with pytest.raises(ValidationError):
            f.number = 4  # type: ignore[misc]


class TestResourceSchemaModel:
    def test_sorts_fields_by_number(self, book: ResourceSchema) -> None:
        assert [f.name for f in book.fields_sorted_by_number()] == ["isbn", "price", "published"]

    def test_parent_is_first_declared_parent(self, store: ResourceSchema, shelf: ResourceSchema) -> None:
        other = ResourceSchema(kind="Library", plural="libraries", type="x/Library")
        multi = ResourceSchema(kind="Book", plural="books", type="x/Book", parents=[shelf, other])
        assert multi.parent is shelf
        assert store.parent is None

    def test_parents_keep_identity(self, shelf: ResourceSchema, book: ResourceSchema) -> None:
        assert book.parents[0] is shelf

    def test_methods_accept_string_values(self) -> None:
        r = ResourceSchema(kind="Book", plural="books", type="x/Book", methods={"create", "global_list"})
        assert r.supports(Method.CREATE)
        assert r.supports(Method.GLOBAL_LIST)
        assert not r.supports(Method.DELETE)

    def test_rejects_unknown_method(self) -> None:
        with pytest.raises(ValidationError):
            ResourceSchema(kind="Book", plural="books", type="x/Book", methods={"undelete"})

    def test_round_trips_through_dict(self, book: ResourceSchema) -> None:
        data = book.model_dump()
        assert data["parents"][0]["kind"] == "Shelf"
        assert ResourceSchema.model_validate(data).model_dump() == data


@pytest.mark.parametrize(
    ("type_name", "expected"),
    [
        ("string", ScalarType.STRING),
        ("int32", ScalarType.INT32),
        ("int64", ScalarType.INT64),
        ("boolean", ScalarType.BOOLEAN),
        ("bool", ScalarType.BOOLEAN),
        ("double", ScalarType.DOUBLE),
        ("FLOAT", ScalarType.FLOAT),
    ],
)
def test_resolve_scalar_type(type_name: str, expected: ScalarType) -> None:
    assert resolve_scalar_type(type_name) is expected


def test_resolve_scalar_type_unknown() -> None:
    assert resolve_scalar_type("timestamp") is None


def test_service_config_default_file_name() -> None:
    config = ServiceConfig(name="Bookstore", package="bookstore.v1")
    assert config.resolved_file_name() == "bookstore/v1/bookstore.proto"


def test_service_config_explicit_file_name() -> None:
    config = ServiceConfig(name="Bookstore", package="bookstore.v1", file_name="api.proto")
    assert config.resolved_file_name() == "api.proto"


def test_service_config_file_name_without_package() -> None:
    config = ServiceConfig(name="Bookstore", package="")
    assert config.resolved_file_name() == "bookstore.proto"
