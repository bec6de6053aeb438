"""Synthetic integral data shaped by a distribution kind.

Every entry point validates its arguments before drawing anything, so a
failed call never leaves a partially written buffer behind.
"""
from __future__ import annotations

import math
import operator
from typing import Any, Tuple

import numpy as np

from .errors import InvalidRange
from .kinds import Datatype, parse_kind


def check_dtype(dtype: Any) -> np.dtype:
    dt = np.dtype(dtype)
    # signed/unsigned integers only: no bool, bytes, str, float or object
    if dt.kind not in ("i", "u"):
        raise TypeError(f"dataset elements must be an integral type, not {dt.name!r}")
    return dt


def check_length(length: int) -> int:
    n = operator.index(length)
    if n <= 0:
        raise ValueError(f"dataset length must be a positive integer; got {n}")
    return n


def check_range(min_value: int, max_value: int, dtype: Any = np.int64) -> Tuple[int, int]:
    lo, hi = operator.index(min_value), operator.index(max_value)
    if hi < lo:
        raise InvalidRange(lo, hi)
    info = np.iinfo(check_dtype(dtype))
    if lo < info.min or hi > info.max:
        raise InvalidRange(lo, hi, f"bounds must fit in {info.dtype.name} [{info.min}, {info.max}]")
    return lo, hi


def swap_count(length: int) -> int:
    """Number of random swaps applied to a nearly-sorted dataset: floor(length ** 0.25)."""
    return math.isqrt(math.isqrt(length))


def pool_size(length: int) -> int:
    """Number of sampled values a few-unique dataset draws from: floor(sqrt(length))."""
    return math.isqrt(length)


def generate(
    length: int,
    kind: Datatype | str = Datatype.RANDOM,
    min_value: int = 0,
    max_value: int = 1000,
    dtype: Any = np.int64,
    rng: Any = None,
) -> np.ndarray:
    """Return a new array of ``length`` values in ``[min_value, max_value]`` shaped by ``kind``.

    ``rng`` is anything :func:`numpy.random.default_rng` accepts. ``None`` draws
    fresh OS entropy on every call; pass a seed or a ``Generator`` for
    reproducible output.
    """
    kind = parse_kind(kind)
    dt = check_dtype(dtype)
    n = check_length(length)
    lo, hi = check_range(min_value, max_value, dt)
    gen = np.random.default_rng(rng)

    if kind is Datatype.FEW_UNIQUE:
        return _few_unique(n, lo, hi, dt, gen)

    values = gen.integers(lo, hi, size=n, dtype=dt, endpoint=True)
    if kind is Datatype.RANDOM:
        return values
    values.sort(kind="stable")
    if kind is Datatype.REVERSE_SORTED:
        return values[::-1].copy()
    if kind is Datatype.NEARLY_SORTED:
        # indices are drawn independently and may coincide
        for _ in range(swap_count(n)):
            i, j = gen.integers(0, n, size=2)
            values[i], values[j] = values[j], values[i]
    return values


def _few_unique(n: int, lo: int, hi: int, dt: np.dtype, gen: np.random.Generator) -> np.ndarray:
    u = pool_size(n)
    values = np.empty(n, dtype=dt)
    values[:u] = gen.integers(lo, hi, size=u, dtype=dt, endpoint=True)
    if n > u:
        # only the pool slots 0..u-1 are ever sampled
        values[u:] = values[gen.integers(0, u, size=n - u)]
    # scatter the pool so it does not sit clustered at the front
    for j in range(u):
        k = gen.integers(0, n)
        values[j], values[k] = values[k], values[j]
    return values


def fill(
    out: np.ndarray,
    kind: Datatype | str = Datatype.RANDOM,
    min_value: int = 0,
    max_value: int = 1000,
    rng: Any = None,
) -> None:
    """Overwrite every slot of the 1-D array ``out`` in place."""
    if out.ndim != 1:
        raise ValueError(f"expected a 1-D buffer; got shape {out.shape}")
    out[...] = generate(len(out), kind, min_value, max_value, out.dtype, rng)
