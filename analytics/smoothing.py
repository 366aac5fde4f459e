from __future__ import annotations

"""Smoothing utilities (EWMA by day)."""

import pandas as pd


def ewma_by_day(df: pd.DataFrame, value_col: str, span: int) -> pd.DataFrame:
    """Return a copy sorted by `day_idx` with a new column f"{value_col}_smooth"."""
    g = df.sort_values("day_idx").copy()
    if g.empty:
        g[f"{value_col}_smooth"] = pd.Series(dtype="float32")
        return g
    g[f"{value_col}_smooth"] = g[value_col].astype("float32").ewm(span=span).mean().astype("float32").values
    return g
