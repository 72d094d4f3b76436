"""Direction-generic binary heap operations over a :class:`HeapStore`.

Every function takes the ordering ``direction`` explicitly; ``min_heap`` and
``max_heap`` bind it. Two outcomes are reported as plain values rather than
exceptions: an empty heap yields ``None`` from ``peek``/``pop``, and a node
that is not a member yields ``False`` from ``remove``/``increase``/``decrease``.

Callers own the nodes. Adding a node that is already a member, or assigning
``node.key`` directly while it is a member, is undefined behaviour and is
not checked here. Key changes must go through ``increase``/``decrease``.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from heapkit.logger import init_logger
from heapkit.position import left_child_index, parent_index, right_child_index, swap_nodes
from heapkit.store import HeapStore
from heapkit.types import Direction, N

logger = init_logger(__name__)


# ---------- rebalancing ----------


def heapify_up(store: HeapStore, direction: Direction, index: int) -> int:
    """Move the node at ``index`` towards the root. Returns its final index."""
    sequence = store.sequence
    i = index
    parent = parent_index(i)
    while parent >= 0 and not direction.dominates(sequence[parent].key, sequence[i].key):
        swap_nodes(store, i, parent)
        i = parent
        parent = parent_index(i)
    return i


def heapify_down(store: HeapStore, direction: Direction, index: int) -> int:
    """Move the node at ``index`` towards the leaves. Returns its final index."""
    sequence = store.sequence
    n = len(sequence)
    i = index
    left = left_child_index(i)
    while left < n:
        right = right_child_index(i)
        best = left
        if right < n and not direction.dominates(sequence[left].key, sequence[right].key):
            best = right

        if direction.dominates(sequence[i].key, sequence[best].key):
            break

        swap_nodes(store, i, best)
        i = best
        left = left_child_index(i)
    return i


def _settle(store: HeapStore, direction: Direction, index: int, *, up_first: bool) -> None:
    # Only one of the two walks can move the node.
    first, second = (heapify_up, heapify_down) if up_first else (heapify_down, heapify_up)
    if first(store, direction, index) == index:
        second(store, direction, index)


# ---------- public API ----------


def create(direction: Direction, initial: Iterable[N] | None = None) -> HeapStore[N]:
    store: HeapStore[N] = HeapStore()
    if initial is not None:
        for node in initial:
            add(store, direction, node)
    return store


def clear(store: HeapStore) -> None:
    logger.debug(f"Clearing heap of {len(store)} nodes")
    store.clear()


def size(store: HeapStore) -> int:
    return store.size()


def add(store: HeapStore[N], direction: Direction, node: N) -> None:
    heapify_up(store, direction, store.append(node))


def peek(store: HeapStore[N]) -> N | None:
    return store.peek_root()


def pop(store: HeapStore[N], direction: Direction) -> N | None:
    n = len(store)
    if n == 0:
        return None
    if n == 1:
        return store.pop_last()

    swap_nodes(store, 0, n - 1)
    root = store.pop_last()
    heapify_down(store, direction, 0)
    return root


def remove(store: HeapStore[N], direction: Direction, node: N) -> bool:
    n = len(store)
    if n == 0:
        return False

    # Dropping the last leaf cannot break the heap property.
    if store.sequence[-1] is node:
        store.pop_last()
        return True

    index = store.index(node)
    if index is None:
        logger.debug(f"remove: node {node!r} is not in the heap")
        return False

    swap_nodes(store, index, n - 1)
    store.pop_last()
    # The node pulled in from the tail may come from another subtree, so it
    # can need to rise as well as sink.
    _settle(store, direction, index, up_first=False)
    return True


def increase(store: HeapStore[N], direction: Direction, node: N, delta: float) -> bool:
    """Add ``delta`` to ``node.key``. A larger key rises in a max-heap and sinks in a min-heap.

    ``delta`` may be negative; the opposite walk then does the work.
    """
    index = store.index(node)
    if index is None:
        logger.debug(f"increase: node {node!r} is not in the heap")
        return False

    node.key += delta
    _settle(store, direction, index, up_first=direction is Direction.MAX)
    return True


def decrease(store: HeapStore[N], direction: Direction, node: N, delta: float) -> bool:
    """Subtract ``delta`` from ``node.key``. A smaller key sinks in a max-heap and rises in a min-heap."""
    index = store.index(node)
    if index is None:
        logger.debug(f"decrease: node {node!r} is not in the heap")
        return False

    node.key -= delta
    _settle(store, direction, index, up_first=direction is Direction.MIN)
    return True


def entries(store: HeapStore[N], reversed: bool = False) -> Iterator[N]:
    """Nodes in array order, not priority order."""
    return store.entries(reversed)


def keys(store: HeapStore, reversed: bool = False) -> Iterator[float]:
    """Node keys in array order, not priority order."""
    return store.keys(reversed)
