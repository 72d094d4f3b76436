from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from heapkit.logger import configure_logging, init_logger
from lib.workload import run_workload
from lib.workload_config import WorkloadConfig, load_workload_config, parse_args

logger = init_logger(__name__)


def save_report(cfg: WorkloadConfig, stats: dict[str, Any], out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    report = {"config": cfg.to_dict(), "stats": stats}
    out_path.write_text(json.dumps(report, indent=2, sort_keys=True))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = load_workload_config(args)
    if args.print_config:
        print(json.dumps(cfg.to_dict(), indent=2, sort_keys=True))
        return 0

    logger.info(
        f"Running {cfg.num_ops} ops on a {cfg.direction.value}-heap "
        f"(seed={cfg.seed}, initial_size={cfg.initial_size})"
    )
    stats = run_workload(cfg, progress=not args.no_progress).to_dict()
    tqdm.write(
        f"Done: {stats['checks']} invariant checks passed, "
        f"final size {stats['final_size']}, max size {stats['max_size']}, "
        f"{stats['elapsed_s']:.3f}s"
    )
    if args.output is not None:
        out_path = Path(args.output)
        save_report(cfg, stats, out_path)
        logger.info(f"Report written to {out_path}")
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(main())
