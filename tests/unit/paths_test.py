"""Unit tests for REST path generation."""

import pytest

from aepc.errors import ResourceCycleError
from aepc.models import ResourceSchema
from aepc.writer.proto.paths import ancestor_chain, collection_path, parent_capture_path


def _chain(depth: int) -> ResourceSchema:
    resource = ResourceSchema(kind="R0", plural="R0s", type="x/R0")
    for i in range(1, depth + 1):
        resource = ResourceSchema(kind=f"R{i}", plural=f"R{i}s", type=f"x/R{i}", parents=[resource])
    return resource


def test_collection_path_without_parent(store: ResourceSchema) -> None:
    assert collection_path(store) == "stores/*"


def test_collection_path_walks_full_chain(book: ResourceSchema) -> None:
    assert collection_path(book) == "stores/*/shelves/*/books/*"


@pytest.mark.parametrize("depth", [0, 1, 2, 5])
def test_collection_path_has_one_segment_per_level(depth: int) -> None:
    path = collection_path(_chain(depth))
    segments = path.split("/")
    assert len(segments) == 2 * (depth + 1)
    assert segments[0::2] == [f"r{i}s" for i in range(depth + 1)]
    assert set(segments[1::2]) == {"*"}


def test_parent_capture_path_without_parent(store: ResourceSchema) -> None:
    assert parent_capture_path(store) == "/{parent=stores}"


def test_parent_capture_path_nested(shelf: ResourceSchema, book: ResourceSchema) -> None:
    assert parent_capture_path(shelf) == "/{parent=stores/*/shelves}"
    assert parent_capture_path(book) == "/{parent=stores/*/shelves/*/books}"


def test_multiple_parents_use_first(shelf: ResourceSchema) -> None:
    other = ResourceSchema(kind="Library", plural="libraries", type="x/Library")
    book = ResourceSchema(kind="Book", plural="books", type="x/Book", parents=[shelf, other])
    assert collection_path(book) == "stores/*/shelves/*/books/*"


def test_ancestor_chain_is_outermost_first(store: ResourceSchema, shelf: ResourceSchema, book: ResourceSchema) -> None:
    assert ancestor_chain(book) == [store, shelf, book]


def test_cycle_is_rejected() -> None:
    a = ResourceSchema(kind="A", plural="as", type="x/A")
    b = ResourceSchema(kind="B", plural="bs", type="x/B", parents=[a])
    object.__setattr__(a, "parents", (b,))

    with pytest.raises(ResourceCycleError) as exc_info:
        collection_path(b)

    assert exc_info.value.kind == "B"
    assert exc_info.value.chain == ["B", "A", "B"]
