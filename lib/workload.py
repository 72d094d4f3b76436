from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np
from tqdm import tqdm

from heapkit import AbstractHeap, HeapError, check_heap, make_heap
from heapkit.types import Direction
from lib.workload_config import WorkloadConfig


@dataclass(eq=False)
class Node:
    key: int
    uid: int


@dataclass(frozen=True)
class Operation:
    name: str
    # Picks the target among live nodes at replay time: floor(pick * len(live)).
    pick: float
    value: int


@dataclass
class WorkloadStats:
    direction: str
    num_ops: int
    counts: dict[str, int] = field(default_factory=dict)
    misses: int = 0
    checks: int = 0
    max_size: int = 0
    final_size: int = 0
    elapsed_s: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def generate_operations(cfg: WorkloadConfig, rng: np.random.Generator) -> list[Operation]:
    names, weights = zip(*cfg.ops.as_pairs())
    probs = np.asarray(weights, dtype=np.float64)
    probs /= probs.sum()

    chosen = rng.choice(len(names), size=cfg.num_ops, p=probs)
    picks = rng.random(cfg.num_ops)
    new_keys = rng.integers(cfg.keys.low, cfg.keys.high, size=cfg.num_ops, endpoint=True)
    deltas = rng.integers(cfg.keys.delta_low, cfg.keys.delta_high, size=cfg.num_ops, endpoint=True)

    ops: list[Operation] = []
    for i, op_idx in enumerate(chosen):
        name = names[int(op_idx)]
        value = new_keys[i] if name == "add" else deltas[i]
        ops.append(Operation(name=name, pick=float(picks[i]), value=int(value)))
    return ops


def _expected_root_key(live: list[Node], direction: Direction) -> int:
    keys = [node.key for node in live]
    return min(keys) if direction is Direction.MIN else max(keys)


class WorkloadRunner:
    """Replays an operation stream against a heap and a plain list of its members."""

    def __init__(self, cfg: WorkloadConfig) -> None:
        self.cfg = cfg
        self.rng = np.random.default_rng(cfg.seed)
        self._next_uid = 0
        initial = [self._new_node(int(k)) for k in self._draw_keys(cfg.initial_size)]
        self.heap: AbstractHeap[Node] = make_heap(cfg.direction, initial)
        self.live: list[Node] = list(initial)
        self.stats = WorkloadStats(direction=cfg.direction.value, num_ops=cfg.num_ops)
        self.stats.max_size = len(initial)

    def _draw_keys(self, n: int) -> np.ndarray:
        return self.rng.integers(self.cfg.keys.low, self.cfg.keys.high, size=n, endpoint=True)

    def _new_node(self, key: int) -> Node:
        node = Node(key=key, uid=self._next_uid)
        self._next_uid += 1
        return node

    def _target(self, op: Operation) -> Node | None:
        if not self.live:
            return None
        return self.live[min(int(op.pick * len(self.live)), len(self.live) - 1)]

    def _forget(self, node: Node) -> None:
        for i, member in enumerate(self.live):
            if member is node:
                self.live[i] = self.live[-1]
                self.live.pop()
                return
        raise HeapError(f"node uid={node.uid} missing from the live set")

    def check(self) -> None:
        check_heap(self.heap.store, self.cfg.direction)
        if self.heap.size != len(self.live):
            raise HeapError(f"heap holds {self.heap.size} nodes, expected {len(self.live)}")
        self.stats.checks += 1

    def apply(self, op: Operation) -> None:
        direction = self.cfg.direction
        counts = self.stats.counts
        counts[op.name] = counts.get(op.name, 0) + 1

        if op.name == "add":
            node = self._new_node(op.value)
            self.heap.add(node)
            self.live.append(node)
        elif op.name == "pop":
            expected = _expected_root_key(self.live, direction) if self.live else None
            popped = self.heap.pop()
            if popped is None:
                if expected is not None:
                    raise HeapError("pop returned None on a non-empty heap")
                self.stats.misses += 1
                return
            if popped.key != expected:
                raise HeapError(f"pop returned key {popped.key}, expected {expected}")
            self._forget(popped)
        else:
            target = self._target(op)
            if target is None:
                # Nothing live: exercise the not-found path with a stranger.
                target = self._new_node(op.value)
                found = getattr(self.heap, op.name)(*self._args(op, target))
                if found:
                    raise HeapError(f"{op.name} reported success for a node outside the heap")
                self.stats.misses += 1
                return
            if not getattr(self.heap, op.name)(*self._args(op, target)):
                raise HeapError(f"{op.name} could not find live node uid={target.uid}")
            if op.name == "remove":
                self._forget(target)

        self.stats.max_size = max(self.stats.max_size, self.heap.size)

    @staticmethod
    def _args(op: Operation, target: Node) -> tuple:
        return (target,) if op.name == "remove" else (target, op.value)

    def run(self, ops: list[Operation], progress: bool = False) -> WorkloadStats:
        start = time.perf_counter()
        check_every = self.cfg.check_every
        for step, op in enumerate(tqdm(ops, desc="Workload", disable=not progress), start=1):
            self.apply(op)
            if check_every and step % check_every == 0:
                self.check()
        self.check()
        self.stats.final_size = self.heap.size
        self.stats.elapsed_s = time.perf_counter() - start
        return self.stats


def run_workload(cfg: WorkloadConfig, progress: bool = False) -> WorkloadStats:
    runner = WorkloadRunner(cfg)
    ops = generate_operations(cfg, runner.rng)
    return runner.run(ops, progress=progress)
