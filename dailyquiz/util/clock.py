from __future__ import annotations

"""Clock abstractions for day-boundary and streak arithmetic."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Protocol

ONE_DAY_MS = 86_400_000


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in the host's local timezone (always tz-aware)."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


@dataclass
class FixedClock:
    """Clock frozen at a given instant; naive values are taken as UTC."""

    instant: datetime

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            self.instant = self.instant.replace(tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.instant

    def advance(self, days: int = 0, **kwargs: float) -> None:
        self.instant = self.instant + timedelta(days=days, **kwargs)


def epoch_ms(now: datetime) -> int:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return int(now.timestamp() * 1000)


def epoch_day(now: datetime) -> int:
    """Whole days since 1970-01-01T00:00Z (floor, UTC based)."""
    return epoch_ms(now) // ONE_DAY_MS


def local_today(now: datetime) -> date:
    return now.date()


def local_yesterday(now: datetime) -> date:
    return now.date() - timedelta(days=1)
