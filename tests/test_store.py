from __future__ import annotations

import pytest

from heapkit import HeapInvariantError, check_heap, is_index_consistent, is_valid_heap
from heapkit.position import left_child_index, parent_index, right_child_index, swap_nodes
from heapkit.store import HeapStore
from heapkit.types import Direction
from tests.heap_checks import Node, heap_keys, layout, make_nodes


def test_index_arithmetic() -> None:
    assert parent_index(0) == -1
    assert [parent_index(i) for i in range(1, 7)] == [0, 0, 1, 1, 2, 2]
    assert [left_child_index(i) for i in range(4)] == [1, 3, 5, 7]
    assert [right_child_index(i) for i in range(4)] == [2, 4, 6, 8]


def test_swap_keeps_index_in_step() -> None:
    store = layout(make_nodes([1, 2, 3]))
    first, last = store.sequence[0], store.sequence[2]

    swap_nodes(store, 0, 2)

    assert heap_keys(store) == [3, 2, 1]
    assert store.index(first) == 2
    assert store.index(last) == 0
    assert is_index_consistent(store)


def test_store_basics() -> None:
    store: HeapStore[Node] = HeapStore()
    assert store.size() == 0
    assert store.peek_root() is None

    a, b = Node(1), Node(2)
    assert store.append(a) == 0
    assert store.append(b) == 1
    assert len(store) == 2
    assert store.peek_root() is a
    assert store.index(b) == 1
    assert store.index(Node(2)) is None

    assert store.pop_last() is b
    assert store.index(b) is None
    assert len(store.index_of) == 1

    store.clear()
    assert store.size() == 0
    assert store.index_of == {}
    assert store.index(a) is None


def test_traversal_is_lazy_and_restartable() -> None:
    store = layout(make_nodes([4, 5, 6]))
    it = store.keys()
    assert next(it) == 4
    assert list(it) == [5, 6]
    assert list(store.keys()) == [4, 5, 6]
    assert list(store.keys(reversed=True)) == [6, 5, 4]
    assert [n.key for n in store.entries(True)] == [6, 5, 4]
    assert list(HeapStore().entries()) == []


@pytest.mark.parametrize(
    "keys, direction, valid",
    [
        ([1, 2, 3, 4], Direction.MIN, True),
        ([1, 2, 3, 4], Direction.MAX, False),
        ([4, 3, 2, 1], Direction.MAX, True),
        ([2, 1, 3], Direction.MIN, False),
        ([5, 5, 5], Direction.MIN, True),
        ([5, 5, 5], Direction.MAX, True),
        ([], Direction.MAX, True),
    ],
)
def test_heap_property_check(keys, direction, valid) -> None:
    store = layout(make_nodes(keys))
    assert is_valid_heap(store, direction) is valid
    if valid:
        check_heap(store, direction)
    else:
        with pytest.raises(HeapInvariantError, match="heap property broken"):
            check_heap(store, direction)


def test_index_check_catches_stale_and_duplicate_entries() -> None:
    store = layout(make_nodes([1, 2, 3]))
    store.index_of[id(store.sequence[1])] = 2
    assert not is_index_consistent(store)
    with pytest.raises(HeapInvariantError, match="mapped to 2"):
        check_heap(store, Direction.MIN)

    node = Node(1)
    dup = layout([node, node])
    assert not is_index_consistent(dup)
    with pytest.raises(HeapInvariantError, match="index holds 1 entries for 2 nodes"):
        check_heap(dup, Direction.MIN)


def test_direction_parse() -> None:
    assert Direction.parse("MAX") is Direction.MAX
    assert Direction.parse(Direction.MIN) is Direction.MIN
    with pytest.raises(ValueError, match="Unsupported heap direction"):
        Direction.parse("median")
