from __future__ import annotations

"""Report builder: accuracy tables and plots from the answer history.

Writes PNG plots and a CSV snapshot into an output directory.
"""

from pathlib import Path
from typing import List

from .config import AnalyticsConfig
from .metrics import accuracy_by
from .plots import plot_accuracy_by, plot_trend
from .prepare import load_and_prepare

BREAKDOWNS = ("category", "difficulty", "diagram_kind", "mode")


def build_reports(data_dir: Path, outdir: Path, cfg: AnalyticsConfig | None = None) -> List[Path]:
    """Generate all reports; returns the written paths (empty when no history)."""
    cfg = cfg or AnalyticsConfig()
    answers, daily = load_and_prepare(Path(data_dir), cfg)
    if answers.empty:
        return []
    outdir = Path(outdir)
    outdir.mkdir(exist_ok=True, parents=True)

    written: List[Path] = []
    trend = outdir / "daily_accuracy.png"
    plot_trend(daily, value_col="accuracy", save_path=trend)
    written.append(trend)

    for col in BREAKDOWNS:
        table = accuracy_by(answers, col, cfg)
        if table.empty:
            continue
        path = outdir / f"accuracy_by_{col}.png"
        plot_accuracy_by(table, col, save_path=path)
        written.append(path)

    snapshot = outdir / "daily_snapshot.csv"
    daily.to_csv(snapshot, index=False)
    written.append(snapshot)
    return written
