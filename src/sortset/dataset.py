from __future__ import annotations

import operator
import sys
from typing import Any, Dict, Iterator, List, Optional, TextIO, Tuple

import numpy as np

from .generator import check_dtype, check_length, check_range, fill
from .kinds import Datatype, parse_kind
from .shape import describe


class Dataset:
    """Fixed-length integral buffer filled with synthetic data of one kind.

    The contents are generated on construction and can be refreshed in place
    with :meth:`regenerate`. The backing array is allocated once and never
    replaced, so a :meth:`view` stays valid for the lifetime of the dataset.

    Indexed access is checked: indexes outside ``[-length, length)`` raise
    ``IndexError``. Assigned values are converted by NumPy to the element
    dtype: floats are truncated (``1.7`` is stored as ``1``) and an integer
    the dtype cannot hold raises ``OverflowError``. Instances are not
    thread-safe.

    Example::

        data = Dataset(20, Datatype.NEARLY_SORTED, 0, 100)
        my_sort(data.view())
    """

    def __init__(
        self,
        length: int,
        kind: Datatype | str = Datatype.RANDOM,
        min_value: int = 0,
        max_value: int = 1000,
        dtype: Any = np.int64,
        seed: Any = None,
    ):
        dt = check_dtype(dtype)
        n = check_length(length)
        check_range(min_value, max_value, dt)
        self._kind = parse_kind(kind)
        # None means fresh entropy for every generation call
        self._rng: Optional[np.random.Generator] = None if seed is None else np.random.default_rng(seed)
        self._data = np.empty(n, dtype=dt)
        self._bounds: Tuple[int, int] = (0, 0)
        self.regenerate(min_value, max_value)

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def kind(self) -> Datatype:
        return self._kind

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def bounds(self) -> Tuple[int, int]:
        """The inclusive ``(min, max)`` interval of the last generation."""
        return self._bounds

    def regenerate(self, min_value: int = 0, max_value: int = 1000) -> None:
        """Overwrite all elements with a new draw; on ``InvalidRange`` nothing changes."""
        lo, hi = check_range(min_value, max_value, self._data.dtype)
        fill(self._data, self._kind, lo, hi, rng=self._rng)
        self._bounds = (lo, hi)

    def view(self) -> np.ndarray:
        """Read/write array sharing this dataset's storage."""
        return self._data.view()

    def to_list(self) -> List[int]:
        return self._data.tolist()

    def describe(self) -> Dict[str, Any]:
        return describe(self._data)

    def display(self, file: Optional[TextIO] = None) -> None:
        out = file if file is not None else sys.stdout
        out.write(" ".join(str(v) for v in self) + "\n")

    def _check_index(self, index: int) -> int:
        i = operator.index(index)
        if not -len(self._data) <= i < len(self._data):
            raise IndexError(f"index {i} out of range for dataset of length {len(self._data)}")
        return i

    def __getitem__(self, index: int) -> int:
        return int(self._data[self._check_index(index)])

    def __setitem__(self, index: int, value: int) -> None:
        self._data[self._check_index(index)] = value

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data.tolist())

    def __repr__(self) -> str:
        lo, hi = self._bounds
        return f"Dataset(length={self.length}, kind={self._kind.name}, range=[{lo}, {hi}], dtype={self.dtype.name})"
