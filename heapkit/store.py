from __future__ import annotations

from typing import Generic, Iterator

from heapkit.types import N


class HeapStore(Generic[N]):
    """Backing array of a binary heap plus the node -> position index.

    ``index_of`` is keyed by ``id(node)``. An entry only exists while the node
    sits in ``sequence``, which keeps the id from being recycled under us.
    The store knows nothing about ordering; the engine does.
    """

    __slots__ = ("sequence", "index_of")

    def __init__(self) -> None:
        self.sequence: list[N] = []
        self.index_of: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self.sequence)

    def size(self) -> int:
        return len(self.sequence)

    def index(self, node: N) -> int | None:
        idx = self.index_of.get(id(node))
        if idx is None or self.sequence[idx] is not node:
            return None
        return idx

    def append(self, node: N) -> int:
        idx = len(self.sequence)
        self.index_of[id(node)] = idx
        self.sequence.append(node)
        return idx

    def pop_last(self) -> N:
        node = self.sequence.pop()
        del self.index_of[id(node)]
        return node

    def peek_root(self) -> N | None:
        return self.sequence[0] if self.sequence else None

    def clear(self) -> None:
        self.index_of.clear()
        self.sequence.clear()

    def entries(self, reversed: bool = False) -> Iterator[N]:
        sequence = self.sequence
        if reversed:
            for i in range(len(sequence) - 1, -1, -1):
                yield sequence[i]
        else:
            for i in range(len(sequence)):
                yield sequence[i]

    def keys(self, reversed: bool = False) -> Iterator[float]:
        for node in self.entries(reversed):
            yield node.key

