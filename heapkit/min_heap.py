"""Min-heap operations: the root always holds the smallest key."""

from __future__ import annotations

from typing import Iterable, Iterator

from heapkit import engine
from heapkit.store import HeapStore
from heapkit.types import Direction, N

DIRECTION = Direction.MIN


def create(initial: Iterable[N] | None = None) -> HeapStore[N]:
    return engine.create(DIRECTION, initial)


def clear(store: HeapStore) -> None:
    engine.clear(store)


def size(store: HeapStore) -> int:
    return engine.size(store)


def add(store: HeapStore[N], node: N) -> None:
    engine.add(store, DIRECTION, node)


def peek(store: HeapStore[N]) -> N | None:
    """Smallest node, or None if the heap is empty."""
    return engine.peek(store)


def pop(store: HeapStore[N]) -> N | None:
    """Remove and return the smallest node, or None if the heap is empty."""
    return engine.pop(store, DIRECTION)


def remove(store: HeapStore[N], node: N) -> bool:
    return engine.remove(store, DIRECTION, node)


def increase(store: HeapStore[N], node: N, delta: float) -> bool:
    return engine.increase(store, DIRECTION, node, delta)


def decrease(store: HeapStore[N], node: N, delta: float) -> bool:
    return engine.decrease(store, DIRECTION, node, delta)


def entries(store: HeapStore[N], reversed: bool = False) -> Iterator[N]:
    return engine.entries(store, reversed)


def keys(store: HeapStore, reversed: bool = False) -> Iterator[float]:
    return engine.keys(store, reversed)
