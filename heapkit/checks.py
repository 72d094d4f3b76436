from __future__ import annotations

from heapkit.position import left_child_index, right_child_index
from heapkit.store import HeapStore
from heapkit.types import Direction


class HeapError(Exception):
    pass


class HeapInvariantError(HeapError):
    pass


def _heap_violation(store: HeapStore, direction: Direction) -> str | None:
    sequence = store.sequence
    n = len(sequence)
    for i in range(n):
        for child in (left_child_index(i), right_child_index(i)):
            if child < n and not direction.dominates(sequence[i].key, sequence[child].key):
                return (
                    f"{direction.value}-heap property broken between index {i} "
                    f"(key={sequence[i].key}) and child {child} (key={sequence[child].key})"
                )
    return None


def _index_violation(store: HeapStore) -> str | None:
    if len(store.index_of) != len(store.sequence):
        return f"index holds {len(store.index_of)} entries for {len(store.sequence)} nodes"
    for i, node in enumerate(store.sequence):
        mapped = store.index_of.get(id(node))
        if mapped != i:
            return f"node at index {i} is mapped to {mapped}"
    return None


def is_valid_heap(store: HeapStore, direction: Direction) -> bool:
    return _heap_violation(store, direction) is None


def is_index_consistent(store: HeapStore) -> bool:
    """True when every node maps to its own position and no node appears twice."""
    return _index_violation(store) is None


def check_heap(store: HeapStore, direction: Direction) -> None:
    problem = _index_violation(store) or _heap_violation(store, direction)
    if problem is not None:
        raise HeapInvariantError(problem)
