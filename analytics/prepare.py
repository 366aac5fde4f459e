from __future__ import annotations

"""Load the answer history and compute the per-day frame used by reports."""

from pathlib import Path

import pandas as pd

from storage.store import load_all

from .config import AnalyticsConfig
from .metrics import daily_accuracy
from .smoothing import ewma_by_day


def load_and_prepare(data_dir: Path, cfg: AnalyticsConfig) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Return (answers, daily) where daily carries an EWMA-smoothed accuracy."""
    answers = load_all(Path(data_dir))
    daily = daily_accuracy(answers)
    daily = ewma_by_day(daily, value_col="accuracy", span=cfg.smoothing_span)
    return answers, daily
