from . import engine, max_heap, min_heap
from .checks import HeapError, HeapInvariantError, check_heap, is_index_consistent, is_valid_heap
from .heap import AbstractHeap, MaxHeap, MinHeap, make_heap
from .store import HeapStore
from .types import Direction, HeapNode

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "engine",
    "max_heap",
    "min_heap",
    "AbstractHeap",
    "MaxHeap",
    "MinHeap",
    "make_heap",
    "HeapStore",
    "Direction",
    "HeapNode",
    "HeapError",
    "HeapInvariantError",
    "check_heap",
    "is_index_consistent",
    "is_valid_heap",
]
