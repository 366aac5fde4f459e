from __future__ import annotations

"""Accuracy metrics over the answer history."""

import numpy as np
import pandas as pd

from .config import AnalyticsConfig


def compute_metrics(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with a float `score` column (1.0 correct, 0.0 wrong)."""
    out = df.copy()
    out["score"] = out["correct"].fillna(False).astype("float32")
    return out


def _accuracy(correct: pd.Series, answered: pd.Series) -> np.ndarray:
    answered_f = answered.astype("float32").to_numpy()
    correct_f = correct.astype("float32").to_numpy()
    # Groups with no answers get 0, not NaN.
    return np.where(answered_f > 0, correct_f / np.maximum(answered_f, 1.0), 0.0).astype("float32")


def accuracy_by(df: pd.DataFrame, column: str, cfg: AnalyticsConfig | None = None) -> pd.DataFrame:
    """Answered/correct/accuracy per value of `column` (e.g. category)."""
    cfg = cfg or AnalyticsConfig()
    cols = [column, "answered", "correct", "accuracy"]
    if df.empty:
        return pd.DataFrame({c: pd.Series(dtype="float32" if c == "accuracy" else "object") for c in cols})
    g = compute_metrics(df).groupby(column, observed=True, dropna=True)["score"]
    table = pd.DataFrame({"answered": g.size(), "correct": g.sum().astype("int64")}).reset_index()
    table = table[table["answered"] >= cfg.min_answers]
    table["accuracy"] = _accuracy(table["correct"], table["answered"])
    table[column] = table[column].astype("string")
    return table[cols].sort_values(column, kind="stable").reset_index(drop=True)


def daily_accuracy(df: pd.DataFrame) -> pd.DataFrame:
    """Answers per local day with accuracy, oldest day first, plus `day_idx`."""
    cols = ["day", "answered", "correct", "accuracy", "day_idx"]
    if df.empty:
        return pd.DataFrame({c: pd.Series(dtype="object") for c in cols})
    g = compute_metrics(df).groupby("day", observed=True)["score"]
    daily = pd.DataFrame({"answered": g.size(), "correct": g.sum().astype("int64")}).reset_index()
    daily = daily.sort_values("day", kind="stable").reset_index(drop=True)
    daily["accuracy"] = _accuracy(daily["correct"], daily["answered"])
    daily["day_idx"] = np.arange(len(daily))
    return daily[cols]


def question_summary(df: pd.DataFrame, question_id: int) -> dict:
    """Attempts, correct answers and first/last answer day for one question."""
    q = df[df["question_id"].astype("Int64") == int(question_id)]
    if q.empty:
        return {"question_id": int(question_id), "attempts": 0, "correct": 0, "first_day": None, "last_day": None}
    days = q["day"].astype("string")
    return {
        "question_id": int(question_id),
        "attempts": int(len(q)),
        "correct": int(q["correct"].fillna(False).sum()),
        "first_day": str(days.min()),
        "last_day": str(days.max()),
    }
