from __future__ import annotations

"""Derived progress stats and their human-readable formatting."""

from dataclasses import dataclass
from typing import Dict

from ..progress.schema import ProgressRecord


@dataclass(frozen=True)
class StatsView:
    streak: int
    total_answered: int
    correct_count: int
    accuracy: int
    last_answered_date: str | None

    def as_dict(self) -> Dict:
        return {
            "streak": self.streak,
            "total": self.total_answered,
            "correct": self.correct_count,
            "accuracy": self.accuracy,
            "last_answered": self.last_answered_date,
        }


def stats_view(record: ProgressRecord) -> StatsView:
    return StatsView(
        streak=record.streak,
        total_answered=record.total_answered,
        correct_count=record.correct_count,
        accuracy=record.accuracy,
        last_answered_date=record.last_answered_date.isoformat() if record.last_answered_date else None,
    )


def format_summary(record: ProgressRecord) -> str:
    """Return a human-readable summary of the stored progress."""
    s = stats_view(record)
    lines = [
        f"Day Streak: {s.streak}",
        f"Questions Answered: {s.total_answered}",
        f"Accuracy: {s.accuracy}% ({s.correct_count}/{s.total_answered})",
    ]
    if s.last_answered_date:
        lines.append(f"Last answered: {s.last_answered_date}")
    return "\n".join(lines)
