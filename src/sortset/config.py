from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .kinds import parse_kind

GRID_AXES = ("length", "kind", "min", "max", "dtype")


@dataclass
class Defaults:
    min: int = 0
    max: int = 1000
    dtype: str = "int64"
    kind: str = "random"


@dataclass
class Limits:
    repeats: int = 3
    shuffle: bool = True


@dataclass
class Config:
    grid: Dict[str, List[Any]]
    defaults: Defaults = field(default_factory=Defaults)
    limits: Limits = field(default_factory=Limits)
    seed: Optional[int] = None


def validate_grid(grid: Dict[str, List[Any]]) -> None:
    unknown = sorted(set(grid) - set(GRID_AXES))
    if unknown:
        raise ValueError(f"unknown grid axes {unknown}; allowed: {list(GRID_AXES)}")
    if not grid.get("length"):
        raise ValueError("grid.length must list at least one dataset length")
    for name, values in grid.items():
        if not isinstance(values, list):
            raise ValueError(f"grid.{name} must be a list")
    for kind in grid.get("kind", []):
        parse_kind(kind)


def validate_limits(limits: Limits) -> None:
    if isinstance(limits.repeats, bool) or not isinstance(limits.repeats, int) or limits.repeats < 1:
        raise ValueError(f"limits.repeats must be a positive integer; got {limits.repeats!r}")


def load_config(path: Path) -> Config:
    data = yaml.safe_load(Path(path).read_text()) or {}
    grid = data.get("grid", {})
    validate_grid(grid)
    defaults = Defaults(**data.get("defaults", {}))
    parse_kind(defaults.kind)
    limits = Limits(**data.get("limits", {}))
    validate_limits(limits)
    seed = data.get("seed", None)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ValueError(f"seed must be an integer; got {seed!r}")
    return Config(grid=grid, defaults=defaults, limits=limits, seed=seed)
