from __future__ import annotations

"""Daily question selection and browse navigation.

Two day numbers live here and they are intentionally independent:

- `daily_index` counts whole UTC epoch-days, so the question rolls over at
  00:00Z for everyone.
- `day_of_year` is only for the "Day N of 365" badge and follows the local
  calendar.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Sequence, TypeVar

from ..util.clock import ONE_DAY_MS, epoch_ms

T = TypeVar("T")


class EmptyBankError(RuntimeError):
    """No daily question can be selected from an empty bank."""


def daily_index(now: datetime, bank_size: int) -> int:
    if bank_size <= 0:
        raise EmptyBankError("Question bank is empty")
    return (epoch_ms(now) // ONE_DAY_MS) % bank_size


def daily_question(now: datetime, bank: Sequence[T]) -> T:
    return bank[daily_index(now, len(bank))]


def day_of_year(now: datetime) -> int:
    # Day 0 is local midnight of 31 Dec of the previous year.
    start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0) - timedelta(days=1)
    return int((now - start).total_seconds() * 1000) // ONE_DAY_MS


def _clamp(index: int, size: int) -> int:
    if size <= 0:
        return 0
    return max(0, min(int(index), size - 1))


@dataclass(frozen=True)
class BrowseCursor:
    """Position in the bank while browsing; never wraps around."""

    index: int
    size: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", _clamp(self.index, self.size))

    def next(self) -> "BrowseCursor":
        return replace(self, index=self.index + 1)

    def prev(self) -> "BrowseCursor":
        return replace(self, index=self.index - 1)

    def jump_to(self, index: int) -> "BrowseCursor":
        return replace(self, index=index)

    @property
    def at_start(self) -> bool:
        return self.index <= 0

    @property
    def at_end(self) -> bool:
        return self.index >= self.size - 1
