from __future__ import annotations

"""Session state value objects.

Handlers never mutate a state in place: they take a `SessionState` and
return a new one (`dataclasses.replace`), so every handler can be exercised
without a live front end.
"""

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple

from ..bank.models import Question

MODES = ("quiz", "flashcard")


@dataclass(frozen=True)
class DragInProgress:
    """An item being dragged. `x`/`y` is the last known pointer position."""

    item_id: str
    x: float
    y: float
    over: Optional[str] = None
    pointer: str = "mouse"


@dataclass(frozen=True)
class SessionState:
    question: Optional[Question] = None
    mode: str = "quiz"
    has_answered: bool = False
    selected_option: Optional[int] = None
    selected_nodes: Tuple[str, ...] = ()
    drag_placements: Mapping[str, str] = field(default_factory=dict)
    browse_mode: bool = False
    browse_index: int = 0
    # Outcome of a submission made while this question was on screen.
    verdict: Optional[bool] = None
    revealed: bool = False
    drag: Optional[DragInProgress] = None
    error: Optional[str] = None

    def with_question(self, question: Optional[Question], *, has_answered: bool) -> "SessionState":
        """Swap the active question and clear every answer-local field."""
        return replace(
            self,
            question=question,
            has_answered=has_answered,
            selected_option=None,
            selected_nodes=(),
            drag_placements={},
            verdict=None,
            revealed=has_answered,
            drag=None,
        )
