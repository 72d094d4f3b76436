from __future__ import annotations

from heapkit.store import HeapStore


def parent_index(index: int) -> int:
    return -1 if index == 0 else (index - 1) // 2


def left_child_index(index: int) -> int:
    return 2 * index + 1


def right_child_index(index: int) -> int:
    return 2 * index + 2


def swap_nodes(store: HeapStore, i: int, j: int) -> None:
    # Every move goes through here so index_of never drifts from sequence.
    sequence = store.sequence
    sequence[i], sequence[j] = sequence[j], sequence[i]
    store.index_of[id(sequence[i])] = i
    store.index_of[id(sequence[j])] = j
