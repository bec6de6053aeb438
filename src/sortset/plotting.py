from __future__ import annotations

from typing import Any, Iterable, Optional

import altair as alt
import numpy as np
import pandas as pd

from .generator import generate
from .kinds import Datatype


def _frame(values: Iterable[int]) -> pd.DataFrame:
    arr = np.asarray(list(values) if not isinstance(values, np.ndarray) else values)
    return pd.DataFrame({"index": np.arange(arr.size), "value": arr})


def plot_dataset(values: Iterable[int], title: str = "Dataset", width: int = 300, height: int = 200) -> alt.Chart:
    """Scatter of value against position, which makes the distribution shape visible."""
    df = _frame(values)
    return (
        alt.Chart(df)
        .mark_point(filled=True, size=12)
        .encode(
            x=alt.X("index", title="index"),
            y=alt.Y("value", title="value"),
            tooltip=["index", "value"],
        )
        .properties(width=width, height=height, title=title)
    )


def plot_kinds(
    length: int = 200,
    min_value: int = 0,
    max_value: int = 1000,
    seed: Optional[Any] = None,
    columns: int = 3,
) -> alt.FacetChart:
    """One panel per dataset kind, all drawn from the same interval."""
    rng = np.random.default_rng(seed)
    frames = []
    for kind in Datatype:
        df = _frame(generate(length, kind, min_value, max_value, rng=rng))
        df["kind"] = kind.value
        frames.append(df)
    df = pd.concat(frames, ignore_index=True)
    return (
        alt.Chart(df)
        .mark_point(filled=True, size=12)
        .encode(
            x=alt.X("index", title="index"),
            y=alt.Y("value", title="value"),
            color=alt.Color("kind", legend=None),
            tooltip=["kind", "index", "value"],
        )
        .properties(width=250, height=180)
        .facet(facet=alt.Facet("kind", sort=[k.value for k in Datatype]), columns=columns)
        .properties(title=f"Dataset kinds, length {length}, range [{min_value}, {max_value}]")
    )
