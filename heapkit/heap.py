from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, Iterable, Iterator

from heapkit import engine
from heapkit.store import HeapStore
from heapkit.types import Direction, N


class AbstractHeap(ABC, Generic[N]):
    """Object interface shared by :class:`MinHeap` and :class:`MaxHeap`.

    Iteration, ``entries``, ``keys`` and ``for_each`` walk the backing array
    in physical order. Only ``peek`` and ``pop`` follow priority order.
    """

    @property
    @abstractmethod
    def size(self) -> int: ...

    @property
    @abstractmethod
    def store(self) -> HeapStore[N]: ...

    @abstractmethod
    def __iter__(self) -> Iterator[N]: ...

    @abstractmethod
    def add(self, node: N) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def decrease(self, node: N, delta: float) -> bool: ...

    @abstractmethod
    def entries(self, reversed: bool = False) -> Iterator[N]: ...

    @abstractmethod
    def increase(self, node: N, delta: float) -> bool: ...

    @abstractmethod
    def keys(self, reversed: bool = False) -> Iterator[float]: ...

    @abstractmethod
    def peek(self) -> N | None: ...

    @abstractmethod
    def pop(self) -> N | None: ...

    @abstractmethod
    def remove(self, node: N) -> bool: ...

    def __len__(self) -> int:
        return self.size

    def for_each(self, callback: Callable[[N, int, "AbstractHeap[N]"], None]) -> None:
        for i, node in enumerate(self.entries()):
            callback(node, i, self)


class _DirectedHeap(AbstractHeap[N]):
    direction: Direction

    def __init__(self, initial: Iterable[N] | None = None) -> None:
        self._store: HeapStore[N] = engine.create(self.direction, initial)

    @property
    def store(self) -> HeapStore[N]:
        return self._store

    @property
    def size(self) -> int:
        return engine.size(self._store)

    def __iter__(self) -> Iterator[N]:
        return engine.entries(self._store)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(engine.keys(self._store))})"

    def add(self, node: N) -> None:
        engine.add(self._store, self.direction, node)

    def clear(self) -> None:
        engine.clear(self._store)

    def decrease(self, node: N, delta: float) -> bool:
        return engine.decrease(self._store, self.direction, node, delta)

    def entries(self, reversed: bool = False) -> Iterator[N]:
        return engine.entries(self._store, reversed)

    def increase(self, node: N, delta: float) -> bool:
        return engine.increase(self._store, self.direction, node, delta)

    def keys(self, reversed: bool = False) -> Iterator[float]:
        return engine.keys(self._store, reversed)

    def peek(self) -> N | None:
        return engine.peek(self._store)

    def pop(self) -> N | None:
        return engine.pop(self._store, self.direction)

    def remove(self, node: N) -> bool:
        return engine.remove(self._store, self.direction, node)


class MinHeap(_DirectedHeap[N]):
    """Heap whose root holds the smallest key."""

    direction = Direction.MIN


class MaxHeap(_DirectedHeap[N]):
    """Heap whose root holds the largest key."""

    direction = Direction.MAX


def make_heap(direction: Direction | str, initial: Iterable[N] | None = None) -> AbstractHeap[N]:
    if Direction.parse(direction) is Direction.MIN:
        return MinHeap(initial)
    return MaxHeap(initial)
