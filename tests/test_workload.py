from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from heapkit.types import Direction
from lib.workload import Operation, WorkloadRunner, generate_operations, run_workload
from lib.workload_config import OpWeights, WorkloadConfig, load_workload_config, parse_args
from scripts.run_workload import main


def _small_config(**updates) -> WorkloadConfig:
    cfg = WorkloadConfig(num_ops=400, initial_size=16, check_every=10)
    return cfg.updated(updates) if updates else cfg


def test_config_from_toml_with_overrides(tmp_path: Path) -> None:
    path = tmp_path / "workload.toml"
    path.write_text(
        'direction = "max"\nnum_ops = 50\n\n[keys]\nlow = -5\nhigh = 5\n\n[ops]\nremove = 0.5\n'
    )
    args = parse_args(["--config", str(path), "--set", "seed=3", "--set", "ops.pop=0.25"])
    cfg = load_workload_config(args)

    assert cfg.direction is Direction.MAX
    assert cfg.num_ops == 50
    assert cfg.seed == 3
    assert (cfg.keys.low, cfg.keys.high) == (-5, 5)
    assert cfg.ops.remove == 0.5
    assert cfg.ops.pop == 0.25
    assert cfg.ops.add == OpWeights().add


def test_config_from_json(tmp_path: Path) -> None:
    path = tmp_path / "workload.json"
    path.write_text(json.dumps({"direction": "min", "check_every": 0}))
    cfg = WorkloadConfig.from_file(path)

    assert cfg.direction is Direction.MIN
    assert cfg.check_every == 0
    assert cfg.to_dict()["direction"] == "min"


@pytest.mark.parametrize(
    "contents, suffix, error, match",
    [
        ("", ".yaml", ValueError, "Unsupported config format"),
        ('colour = "red"\n', ".toml", ValueError, "Unknown config field"),
        ('direction = "median"\n', ".toml", ValueError, "Invalid value `median`"),
        ("num_ops = -1\n", ".toml", ValueError, "num_ops must be >= 0"),
        ("[keys]\nlow = 9\nhigh = 1\n", ".toml", ValueError, "exceeds keys.high"),
        ("[ops]\nadd = 0\npop = 0\nremove = 0\nincrease = 0\ndecrease = 0\n", ".toml", ValueError, "positive sum"),
    ],
)
def test_config_errors(tmp_path: Path, contents, suffix, error, match) -> None:
    path = tmp_path / f"bad{suffix}"
    path.write_text(contents)
    with pytest.raises(error, match=match):
        WorkloadConfig.from_file(path)


def test_config_missing_file_and_bad_override(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        WorkloadConfig.from_file(tmp_path / "nope.toml")
    with pytest.raises(ValueError, match="expected KEY=VALUE"):
        WorkloadConfig().with_overrides(["seed"])
    with pytest.raises(ValueError, match="Unknown config field `keys.middle`"):
        WorkloadConfig().with_overrides(["keys.middle=3"])
    with pytest.raises(ValueError, match="is a section"):
        WorkloadConfig().with_overrides(["keys=3"])
    with pytest.raises(ValueError, match="`seed` is not a section"):
        WorkloadConfig().with_overrides(["seed.low=3"])


def test_generate_operations_is_seeded() -> None:
    cfg = _small_config()
    first = generate_operations(cfg, np.random.default_rng(5))
    second = generate_operations(cfg, np.random.default_rng(5))

    assert first == second
    assert len(first) == cfg.num_ops
    assert {op.name for op in first} <= {"add", "pop", "remove", "increase", "decrease"}
    for op in first:
        assert 0.0 <= op.pick < 1.0
        if op.name == "add":
            assert cfg.keys.low <= op.value <= cfg.keys.high
        else:
            assert cfg.keys.delta_low <= op.value <= cfg.keys.delta_high


@pytest.mark.parametrize("direction", ["min", "max"])
def test_run_workload_passes_checks(direction) -> None:
    cfg = _small_config(direction=direction)
    stats = run_workload(cfg)

    assert stats.direction == direction
    assert sum(stats.counts.values()) == cfg.num_ops
    assert stats.checks == cfg.num_ops // cfg.check_every + 1
    assert stats.max_size >= cfg.initial_size
    assert stats.final_size >= 0


def test_runner_counts_misses_on_empty_heap() -> None:
    cfg = _small_config(initial_size=0)
    runner = WorkloadRunner(cfg)
    ops = [
        Operation("pop", 0.0, 0),
        Operation("remove", 0.5, 0),
        Operation("increase", 0.5, 3),
        Operation("add", 0.0, 7),
        Operation("decrease", 0.9, 2),
        Operation("pop", 0.0, 0),
    ]
    stats = runner.run(ops)

    assert stats.misses == 3
    assert stats.final_size == 0
    assert stats.counts == {"pop": 2, "remove": 1, "increase": 1, "add": 1, "decrease": 1}


def test_script_writes_report(monkeypatch, tmp_path: Path) -> None:
    out = tmp_path / "report" / "run.json"
    calls = []

    import scripts.run_workload as script

    real_run = script.run_workload

    def spy(cfg, progress=False):
        calls.append(progress)
        return real_run(cfg, progress=progress)

    monkeypatch.setattr("scripts.run_workload.run_workload", spy)
    code = main(["--set", "num_ops=200", "--set", "direction=max", "--no-progress", "--output", str(out)])

    assert code == 0
    assert calls == [False]
    report = json.loads(out.read_text())
    assert report["config"]["direction"] == "max"
    assert report["config"]["num_ops"] == 200
    assert sum(report["stats"]["counts"].values()) == 200


def test_script_print_config(capsys) -> None:
    assert main(["--print-config", "--set", "seed=11"]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["seed"] == 11
    assert printed["ops"]["add"] == OpWeights().add
