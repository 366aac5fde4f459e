from __future__ import annotations

"""Correctness and submit-readiness checks.

Both functions are pure: they only read the question and the session state.
"""

from ..bank.models import Question
from .state import SessionState


def check_correct(question: Question, state: SessionState) -> bool:
    if question.type == "text":
        return state.selected_option is not None and state.selected_option == question.correct

    if question.interaction == "drag":
        placements = state.drag_placements
        return all(placements.get(zone) == item for zone, item in question.correct.items())

    selected = state.selected_nodes
    if question.multi_select:
        return len(selected) == len(question.correct) and all(i in selected for i in question.correct)
    return bool(selected) and selected[0] == question.correct


def can_submit(question: Question, state: SessionState) -> bool:
    """True when an explicit submit would be accepted.

    Text questions and single-click diagrams answer on the first click, so
    they never need a submit step.
    """
    if state.has_answered or not question.is_diagram:
        return False
    if question.interaction == "drag":
        zones = question.diagram.zone_ids()
        return all(z in state.drag_placements for z in zones)
    if question.multi_select:
        return len(state.selected_nodes) > 0
    return False
