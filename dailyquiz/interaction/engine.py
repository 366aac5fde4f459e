from __future__ import annotations

"""Answer handlers for every question type.

Each handler takes the active question and a `SessionState` and returns the
next state. A handler that cannot apply (already answered, wrong question
type, unknown entity, incomplete selection) returns the state unchanged.
A submission is visible to callers as `has_answered` flipping to True with
`verdict` set.
"""

from dataclasses import replace
from typing import Optional

from ..bank.models import Question
from ..diagrams.base_diagram import Canvas, DiagramView
from ..app.diagram_registry import make_renderer
from .checker import can_submit, check_correct
from .state import MODES, SessionState


def _answered(question: Question, state: SessionState, **changes) -> SessionState:
    pending = replace(state, **changes)
    return replace(pending, has_answered=True, verdict=check_correct(question, pending), drag=None)


def set_mode(question: Question, state: SessionState, mode: str) -> SessionState:
    if question.is_diagram or mode not in MODES or mode == state.mode:
        return state
    return replace(state, mode=mode)


def select_option(question: Question, state: SessionState, index: int) -> SessionState:
    if question.is_diagram or state.has_answered or state.mode != "quiz":
        return state
    if not (0 <= index < len(question.options)):
        return state
    return _answered(question, state, selected_option=index)


def reveal_flashcard(question: Question, state: SessionState) -> SessionState:
    """Reveal the answer; the first reveal counts as a correct answer."""
    if question.is_diagram or state.mode != "flashcard":
        return state
    if state.has_answered:
        return state if state.revealed else replace(state, revealed=True)
    return _answered(question, state, selected_option=int(question.correct), revealed=True)


def click_entity(question: Question, state: SessionState, entity_id: str) -> SessionState:
    if not question.is_diagram or question.interaction != "click" or state.has_answered:
        return state
    if entity_id not in question.diagram.selectable_ids():
        return state
    if not question.multi_select:
        return _answered(question, state, selected_nodes=(entity_id,))
    selected = state.selected_nodes
    if entity_id in selected:
        selected = tuple(i for i in selected if i != entity_id)
    else:
        selected = selected + (entity_id,)
    return replace(state, selected_nodes=selected)


def submit(question: Question, state: SessionState) -> SessionState:
    if not can_submit(question, state):
        return state
    return _answered(question, state)


def render_diagram(question: Question, state: SessionState, canvas: Optional[Canvas] = None) -> DiagramView:
    return make_renderer(question.diagram.type, canvas).render(question, state)
