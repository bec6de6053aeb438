from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pandas as pd


def read_jsonl(path: Path) -> List[dict]:
    rows = []
    with Path(path).open() as f:
        for line in f:
            try:
                rows.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return rows


def summarize_survey(path: Path) -> pd.DataFrame:
    rows = read_jsonl(path)
    if not rows:
        return pd.DataFrame()
    df = pd.DataFrame(rows)
    # explode params dict to columns, keeping the measured min/max separate
    if "params" in df.columns:
        params_df = pd.json_normalize(df["params"].tolist()).add_prefix("param_")
        df = pd.concat([df.drop(columns=["params"]), params_df], axis=1)
        df = df.rename(columns={"param_kind": "kind", "param_length": "length"})
    group_cols = [c for c in ["kind", "length"] if c in df.columns]
    ok = df[df["status"] == "ok"] if "status" in df.columns else df
    agg = {
        col: ["median", "mean"]
        for col in ["gen_ms", "distinct", "displaced"]
        if col in ok.columns
    }
    if ok.empty or not agg or not group_cols:
        g = df[group_cols].drop_duplicates().reset_index(drop=True) if group_cols else pd.DataFrame()
    else:
        g = ok.groupby(group_cols, dropna=False).agg(agg)
        # flatten columns
        g.columns = ["_".join([a for a in col if a]) for col in g.columns.to_flat_index()]
        g = g.reset_index()
    # add counts per status
    if "status" in df.columns and group_cols:
        counts = df.groupby(group_cols + ["status"]).size().unstack(fill_value=0).reset_index()
        g = g.merge(counts, on=group_cols, how="outer") if not g.empty else counts
    return g
