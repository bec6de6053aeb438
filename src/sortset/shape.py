from __future__ import annotations

from typing import Any, Dict, Iterable, List

import numpy as np

from .generator import pool_size, swap_count
from .kinds import Datatype, parse_kind


def _as_array(values: Iterable[int]) -> np.ndarray:
    if isinstance(values, np.ndarray):
        return values
    return np.asarray(list(values))


def is_non_decreasing(values: Iterable[int]) -> bool:
    arr = _as_array(values)
    return bool(np.all(arr[:-1] <= arr[1:]))


def is_non_increasing(values: Iterable[int]) -> bool:
    arr = _as_array(values)
    return bool(np.all(arr[:-1] >= arr[1:]))


def displaced_positions(values: Iterable[int]) -> int:
    """Count positions that differ from the ascending sort of the same values."""
    arr = _as_array(values)
    return int(np.count_nonzero(arr != np.sort(arr, kind="stable")))


def distinct_count(values: Iterable[int]) -> int:
    return int(np.unique(_as_array(values)).size)


def describe(values: Iterable[int]) -> Dict[str, Any]:
    arr = _as_array(values)
    if arr.size == 0:
        return {"length": 0, "min": None, "max": None, "distinct": 0,
                "non_decreasing": True, "non_increasing": True, "displaced": 0}
    return {
        "length": int(arr.size),
        "min": int(arr.min()),
        "max": int(arr.max()),
        "distinct": distinct_count(arr),
        "non_decreasing": is_non_decreasing(arr),
        "non_increasing": is_non_increasing(arr),
        "displaced": displaced_positions(arr),
    }


def violations(values: Iterable[int], kind: Datatype | str, min_value: int, max_value: int) -> List[str]:
    """List the structural invariants of ``kind`` that ``values`` break.

    An empty list means the values look like a valid draw of that kind.
    """
    kind = parse_kind(kind)
    arr = _as_array(values)
    n = int(arr.size)
    problems: List[str] = []
    if n == 0:
        return ["dataset is empty"]
    lo, hi = int(arr.min()), int(arr.max())
    if lo < min_value or hi > max_value:
        problems.append(f"values [{lo}, {hi}] fall outside [{min_value}, {max_value}]")
    if kind is Datatype.SORTED and not is_non_decreasing(arr):
        problems.append("not in non-decreasing order")
    elif kind is Datatype.REVERSE_SORTED and not is_non_increasing(arr):
        problems.append("not in non-increasing order")
    elif kind is Datatype.NEARLY_SORTED:
        limit = 2 * swap_count(n)
        moved = displaced_positions(arr)
        if moved > limit:
            problems.append(f"{moved} positions displaced from sorted order (limit {limit})")
    elif kind is Datatype.FEW_UNIQUE:
        limit = pool_size(n)
        distinct = distinct_count(arr)
        if distinct > limit:
            problems.append(f"{distinct} distinct values (limit {limit})")
    return problems
