from __future__ import annotations

import argparse
from dataclasses import dataclass, field

from heapkit.types import Direction
from lib.config_base import ConfigBase


@dataclass
class OpWeights(ConfigBase):
    # Relative odds of each operation; normalised when drawing.
    add: float = 0.4
    pop: float = 0.2
    remove: float = 0.15
    increase: float = 0.125
    decrease: float = 0.125

    def as_pairs(self) -> list[tuple[str, float]]:
        return [
            ("add", self.add),
            ("pop", self.pop),
            ("remove", self.remove),
            ("increase", self.increase),
            ("decrease", self.decrease),
        ]


@dataclass
class KeyConfig(ConfigBase):
    low: int = 0
    high: int = 1000
    # Deltas for increase/decrease are drawn from [delta_low, delta_high].
    delta_low: int = 0
    delta_high: int = 50


@dataclass
class WorkloadConfig(ConfigBase):
    seed: int = 42
    direction: Direction = Direction.MIN
    initial_size: int = 64
    num_ops: int = 10_000
    check_every: int = 100
    keys: KeyConfig = field(default_factory=KeyConfig)
    ops: OpWeights = field(default_factory=OpWeights)

    def __post_init__(self) -> None:
        if self.initial_size < 0:
            raise ValueError(f"initial_size must be >= 0, got {self.initial_size}")
        if self.num_ops < 0:
            raise ValueError(f"num_ops must be >= 0, got {self.num_ops}")
        if self.check_every < 0:
            raise ValueError(f"check_every must be >= 0, got {self.check_every}")
        if self.keys.low > self.keys.high:
            raise ValueError(f"keys.low ({self.keys.low}) exceeds keys.high ({self.keys.high})")
        if self.keys.delta_low > self.keys.delta_high:
            raise ValueError(
                f"keys.delta_low ({self.keys.delta_low}) exceeds keys.delta_high ({self.keys.delta_high})"
            )
        weights = [w for _, w in self.ops.as_pairs()]
        if any(w < 0 for w in weights) or sum(weights) <= 0:
            raise ValueError(f"Operation weights must be non-negative with a positive sum: {weights}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay a random operation stream against an indexed heap."
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to .toml or .json config."
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override config key(s), e.g. --set direction=max --set ops.remove=0.3",
    )
    parser.add_argument(
        "--output", type=str, default=None, help="Write resolved config and stats as JSON here."
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Disable the progress bar."
    )
    parser.add_argument(
        "--print-config", action="store_true", help="Print final config and exit."
    )
    return parser.parse_args(argv)


def load_workload_config(args: argparse.Namespace) -> WorkloadConfig:
    cfg = WorkloadConfig() if args.config is None else WorkloadConfig.from_file(args.config)
    return cfg.with_overrides(args.set)
