from __future__ import annotations

import enum
from typing import Protocol, TypeVar


class HeapNode(Protocol):
    """Anything with a mutable numeric ``key``. Other attributes are left alone."""

    key: float


N = TypeVar("N", bound=HeapNode)


class Direction(enum.Enum):
    MIN = "min"
    MAX = "max"

    def dominates(self, a: float, b: float) -> bool:
        """Return True if key ``a`` may sit above key ``b``. Equal keys dominate each other."""
        return a <= b if self is Direction.MIN else a >= b

    @classmethod
    def parse(cls, value: str | Direction) -> Direction:
        if isinstance(value, Direction):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            choices = [d.value for d in cls]
            raise ValueError(f"Unsupported heap direction `{value}`. Choices: {choices}") from None
