from __future__ import annotations

"""Matplotlib plots for accuracy trends and breakdowns."""

import os
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402


def plot_trend(
    daily: pd.DataFrame,
    *,
    value_col: str = "accuracy",
    save_path: Optional[str | os.PathLike[str]] = None,
) -> None:
    if daily.empty:
        return
    g = daily.sort_values("day_idx")
    plt.figure()
    plt.plot(g["day_idx"], g[value_col], marker="o", linestyle="", label=value_col)
    smooth_col = f"{value_col}_smooth"
    if smooth_col in g.columns:
        plt.plot(g["day_idx"], g[smooth_col], linewidth=2, label=f"{value_col} (EWMA)")
    step = max(1, len(g) // 10)
    plt.xticks(ticks=g["day_idx"].to_numpy()[::step], labels=g["day"].astype(str).to_numpy()[::step], rotation=45)
    plt.ylim(-0.05, 1.05)
    plt.xlabel("Day")
    plt.ylabel(value_col)
    plt.title("Daily accuracy")
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()


def plot_accuracy_by(
    table: pd.DataFrame,
    column: str,
    *,
    save_path: Optional[str | os.PathLike[str]] = None,
) -> None:
    if table.empty:
        return
    labels = table[column].astype(str).tolist()
    x = np.arange(len(labels))
    plt.figure()
    bars = plt.bar(x, table["accuracy"].to_numpy(dtype="float32"))
    for bar, n in zip(bars, table["answered"].tolist()):
        plt.annotate(f"n={n}", (bar.get_x() + bar.get_width() / 2, bar.get_height()), ha="center", va="bottom")
    plt.xticks(ticks=x, labels=labels, rotation=30)
    plt.ylim(0, 1.1)
    plt.ylabel("accuracy")
    plt.title(f"Accuracy by {column}")
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
