from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from sortset.errors import InvalidRange
from sortset.generator import check_dtype, fill, generate, pool_size, swap_count
from sortset.kinds import Datatype
from sortset.shape import displaced_positions, distinct_count


@pytest.mark.parametrize("n, expected", [(1, 1), (3, 1), (15, 1), (16, 2), (80, 2), (81, 3), (10000, 10)])
def test_swap_count_is_floor_fourth_root(n, expected):
    assert swap_count(n) == expected


@pytest.mark.parametrize("n, expected", [(1, 1), (3, 1), (4, 2), (16, 4), (17, 4), (10000, 100)])
def test_pool_size_is_floor_sqrt(n, expected):
    assert pool_size(n) == expected


@pytest.mark.parametrize("kind", list(Datatype))
def test_values_stay_within_bounds(kind):
    values = generate(500, kind, -20, 20, rng=11)
    assert values.shape == (500,)
    assert values.min() >= -20
    assert values.max() <= 20


@pytest.mark.parametrize("kind", list(Datatype))
def test_length_one_is_valid_for_every_kind(kind):
    values = generate(1, kind, 5, 9, rng=3)
    assert values.shape == (1,)
    assert 5 <= int(values[0]) <= 9


@pytest.mark.parametrize("kind", list(Datatype))
def test_degenerate_interval_yields_constant(kind):
    values = generate(64, kind, 7, 7, rng=0)
    assert set(values.tolist()) == {7}


def test_sorted_is_non_decreasing():
    values = generate(1000, Datatype.SORTED, 0, 50, rng=1)
    assert np.all(values[:-1] <= values[1:])


def test_reverse_sorted_is_non_increasing():
    values = generate(1000, Datatype.REVERSE_SORTED, 0, 50, rng=1)
    assert np.all(values[:-1] >= values[1:])


def test_nearly_sorted_displacement_is_bounded():
    for seed in range(20):
        values = generate(10000, Datatype.NEARLY_SORTED, 0, 10**6, rng=seed)
        assert displaced_positions(values) <= 2 * swap_count(10000)


def test_few_unique_distinct_count_is_bounded():
    for n in (1, 2, 3, 4, 16, 17, 1000):
        values = generate(n, Datatype.FEW_UNIQUE, 0, 10**6, rng=n)
        assert distinct_count(values) <= pool_size(n)


def test_few_unique_small_lengths_have_one_value():
    for n in (1, 2, 3):
        assert distinct_count(generate(n, Datatype.FEW_UNIQUE, 0, 100, rng=5)) == 1


def test_random_is_roughly_uniform():
    rng = np.random.default_rng(1234)
    counts = Counter()
    for _ in range(10):
        counts.update(generate(10000, Datatype.RANDOM, 0, 9, rng=rng).tolist())
    assert set(counts) == set(range(10))
    for value in range(10):
        assert abs(counts[value] - 10000) < 500


def test_same_seed_reproduces_output():
    for kind in Datatype:
        a = generate(200, kind, 0, 1000, rng=42)
        b = generate(200, kind, 0, 1000, rng=42)
        assert a.tolist() == b.tolist()


def test_kind_accepts_names_and_values():
    a = generate(50, "few_unique", 0, 1000, rng=9)
    b = generate(50, "FEW_UNIQUE", 0, 1000, rng=9)
    assert a.tolist() == b.tolist()
    with pytest.raises(ValueError):
        generate(50, "bogus")


def test_inverted_range_raises():
    with pytest.raises(InvalidRange) as exc:
        generate(10, Datatype.RANDOM, 10, 5)
    assert exc.value.min_value == 10
    assert exc.value.max_value == 5
    assert isinstance(exc.value, ValueError)


def test_bounds_must_fit_dtype():
    with pytest.raises(InvalidRange):
        generate(10, Datatype.RANDOM, 0, 300, dtype=np.int8)
    with pytest.raises(InvalidRange):
        generate(10, Datatype.RANDOM, -1, 10, dtype=np.uint16)
    values = generate(100, Datatype.SORTED, -128, 127, dtype=np.int8, rng=0)
    assert values.dtype == np.int8


def test_full_uint64_range():
    values = generate(100, Datatype.RANDOM, 0, 2**64 - 1, dtype=np.uint64, rng=0)
    assert values.dtype == np.uint64


@pytest.mark.parametrize("dtype", [bool, np.float64, "S1", str, object])
def test_non_integral_dtypes_are_rejected(dtype):
    with pytest.raises(TypeError):
        check_dtype(dtype)


def test_non_positive_length_is_rejected():
    with pytest.raises(ValueError):
        generate(0)
    with pytest.raises(ValueError):
        generate(-3)


def test_fill_overwrites_in_place():
    buf = np.zeros(32, dtype=np.int32)
    fill(buf, Datatype.SORTED, 100, 200, rng=4)
    assert buf.min() >= 100
    assert np.all(buf[:-1] <= buf[1:])


def test_fill_leaves_buffer_untouched_on_error():
    buf = np.arange(8, dtype=np.int64)
    with pytest.raises(InvalidRange):
        fill(buf, Datatype.RANDOM, 9, 1)
    assert buf.tolist() == list(range(8))


def test_fill_requires_one_dimension():
    with pytest.raises(ValueError):
        fill(np.zeros((2, 2), dtype=np.int64))
