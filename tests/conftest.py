"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from aepc.models import FieldSchema, Method, ResourceSchema
from aepc.writer.proto import FileAccumulator, ServiceAccumulator

_REPO_ROOT = Path(__file__).parent.parent

ALL_METHODS = frozenset(Method)


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared resource fixtures: stores/*/shelves/*/books/*
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> ResourceSchema:
    return ResourceSchema(
        kind="Store",
        plural="stores",
        type="bookstore.example.com/Store",
        fields=[FieldSchema(name="name", type="string", number=1)],
        methods=ALL_METHODS,
    )


@pytest.fixture
def shelf(store: ResourceSchema) -> ResourceSchema:
    return ResourceSchema(
        kind="Shelf",
        plural="shelves",
        type="bookstore.example.com/Shelf",
        fields=[FieldSchema(name="theme", type="string", number=1)],
        parents=[store],
        methods=ALL_METHODS,
    )


@pytest.fixture
def book(shelf: ResourceSchema) -> ResourceSchema:
    return ResourceSchema(
        kind="Book",
        plural="books",
        type="bookstore.example.com/Book",
        fields=[
            FieldSchema(name="price", type="int32", number=2),
            FieldSchema(name="isbn", type="string", number=1),
            FieldSchema(name="published", type="bool", number=3),
        ],
        parents=[shelf],
        methods=ALL_METHODS,
    )


@pytest.fixture
def file_acc() -> FileAccumulator:
    return FileAccumulator("bookstore.v1", "bookstore/v1/bookstore.proto")


@pytest.fixture
def service_acc() -> ServiceAccumulator:
    return ServiceAccumulator("Bookstore")
