from .config import AnalyticsConfig
from .metrics import accuracy_by, compute_metrics, daily_accuracy, question_summary
from .prepare import load_and_prepare
from .smoothing import ewma_by_day
from .plots import plot_trend, plot_accuracy_by
from .report import build_reports

__all__ = [
    "AnalyticsConfig",
    "accuracy_by",
    "compute_metrics",
    "daily_accuracy",
    "question_summary",
    "load_and_prepare",
    "ewma_by_day",
    "plot_trend",
    "plot_accuracy_by",
    "build_reports",
]
