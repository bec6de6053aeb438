from __future__ import annotations

import json
import random
import shlex
import sys
import time
from datetime import datetime, timezone
from itertools import product
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import psutil
import structlog

from .config import Config
from .dataset import Dataset
from .shape import violations

logger = structlog.get_logger(__name__)


def expand_grid(grid: Dict[str, List]) -> List[Dict[str, object]]:
    keys = list(grid.keys())
    values = [grid[k] for k in keys]
    points = []
    for combo in product(*values) if values else [()]:
        params = dict(zip(keys, combo))
        points.append(params)
    return points


def resolve_point(cfg: Config, params: Dict[str, Any]) -> Dict[str, Any]:
    """Fill the axes missing from a grid point with the configured defaults."""
    d = cfg.defaults
    return {
        "length": params["length"],
        "kind": params.get("kind", d.kind),
        "min": params.get("min", d.min),
        "max": params.get("max", d.max),
        "dtype": params.get("dtype", d.dtype),
    }


def survey_once(point: Dict[str, Any], seed: Any = None) -> Dict[str, Any]:
    ts = datetime.now(timezone.utc).isoformat()
    proc = psutil.Process()
    start = time.perf_counter()
    try:
        data = Dataset(point["length"], point["kind"], point["min"], point["max"], dtype=point["dtype"], seed=seed)
    except (ValueError, TypeError) as e:
        return {
            "ts": ts,
            "status": "error",
            "gen_ms": round((time.perf_counter() - start) * 1000.0, 3),
            "error": str(e),
        }
    gen_ms = (time.perf_counter() - start) * 1000.0
    problems = violations(data.view(), data.kind, point["min"], point["max"])
    shape = data.describe()
    return {
        "ts": ts,
        "status": "ok" if not problems else "failed",
        "gen_ms": round(gen_ms, 3),
        "rss_mb": round(proc.memory_info().rss / (1024**2), 3),
        **{k: shape[k] for k in ("min", "max", "distinct", "displaced", "non_decreasing", "non_increasing")},
        "violations": problems,
    }


def run_survey(cfg: Config, out_path: Path, seed: Optional[int] = None) -> int:
    """Generate every grid point ``limits.repeats`` times and append one JSONL record per draw.

    Only shape metrics are recorded, never the generated values. Returns the
    number of records that were not ``ok``.
    """
    seed = cfg.seed if seed is None else seed
    points = expand_grid(cfg.grid)
    if cfg.limits.shuffle:
        random.Random(seed).shuffle(points)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    # provenance snapshot
    prov = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "seed": seed,
        "cwd": str(Path.cwd()),
        "python": sys.version,
        "cmdline": " ".join(shlex.quote(a) for a in sys.argv),
    }
    # one generator for the whole survey keeps a seeded run reproducible
    rng = None if seed is None else np.random.default_rng(seed)
    (out_path.parent / "provenance.json").write_text(json.dumps(prov, indent=2))

    bad = 0
    with out_path.open("a") as f:
        for params in points:
            point = resolve_point(cfg, params)
            logger.debug("survey-point", **point)
            for _ in range(cfg.limits.repeats):
                rec = survey_once(point, seed=rng)
                rec["params"] = point
                f.write(json.dumps(rec) + "\n")
                f.flush()
                if rec["status"] != "ok":
                    bad += 1
                    logger.warning("survey-point-not-ok", status=rec["status"], **point)
    logger.info("survey-finished", points=len(points), not_ok=bad, out=str(out_path))
    return bad
