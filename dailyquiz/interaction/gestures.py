from __future__ import annotations

"""Unified drag gestures for mouse and touch input.

One pointer model drives every drag: `pointer_down` picks an item,
`pointer_move` tracks the pointer and the hovered drop target, and
`pointer_up` resolves the drop. Touch handlers are thin adapters over the
same functions; at touch end the last known touch position is the release
point.

Targets come from a hit-test callback returning a zone id, `POOL`, or None.
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, Mapping, Optional, Sequence

from ..app.explain import trace as xtrace
from ..bank.models import Question
from .state import DragInProgress, SessionState

POOL = "__pool__"

HitTest = Callable[[float, float], Optional[str]]
Pick = Callable[[float, float], Optional[str]]


@dataclass(frozen=True)
class TouchPoint:
    identifier: int
    x: float
    y: float


def place_item(placements: Mapping[str, str], item_id: str, zone_id: str) -> Dict[str, str]:
    """Put `item_id` into `zone_id`; an item occupies at most one zone."""
    out = {z: i for z, i in placements.items() if i != item_id}
    out[zone_id] = item_id
    return out


def unplace_item(placements: Mapping[str, str], item_id: str) -> Dict[str, str]:
    return {z: i for z, i in placements.items() if i != item_id}


def _accepts_drag(question: Optional[Question], state: SessionState) -> bool:
    return (
        question is not None
        and question.interaction == "drag"
        and not state.has_answered
    )


def pointer_down(question: Question, state: SessionState, x: float, y: float, pick: Pick, *, pointer: str = "mouse") -> SessionState:
    if not _accepts_drag(question, state) or state.drag is not None:
        return state
    item_id = pick(x, y)
    if item_id is None or item_id not in question.diagram.item_ids():
        return state
    return replace(state, drag=DragInProgress(item_id=item_id, x=x, y=y, over=None, pointer=pointer))


def pointer_move(question: Question, state: SessionState, x: float, y: float, hit_test: HitTest) -> SessionState:
    if state.drag is None:
        return state
    return replace(state, drag=replace(state.drag, x=x, y=y, over=hit_test(x, y)))


def pointer_up(question: Question, state: SessionState, x: float, y: float, hit_test: HitTest) -> SessionState:
    drag = state.drag
    if drag is None:
        return state
    target = hit_test(x, y)
    zones = question.diagram.zone_ids() if question.diagram is not None else ()
    if target == POOL:
        placements = unplace_item(state.drag_placements, drag.item_id)
    elif target is not None and target in zones:
        placements = place_item(state.drag_placements, drag.item_id, target)
    else:
        placements = dict(state.drag_placements)
    xtrace("drop_resolved", {"item": drag.item_id, "target": target, "pointer": drag.pointer})
    return replace(state, drag=None, drag_placements=placements)


def _primary(touches: Sequence[TouchPoint]) -> Optional[TouchPoint]:
    return touches[0] if touches else None


def touch_start(question: Question, state: SessionState, touches: Sequence[TouchPoint], pick: Pick) -> SessionState:
    t = _primary(touches)
    if t is None:
        return state
    return pointer_down(question, state, t.x, t.y, pick, pointer="touch")


def touch_move(question: Question, state: SessionState, touches: Sequence[TouchPoint], hit_test: HitTest) -> SessionState:
    t = _primary(touches)
    if t is None:
        return state
    return pointer_move(question, state, t.x, t.y, hit_test)


def touch_end(question: Question, state: SessionState, hit_test: HitTest) -> SessionState:
    if state.drag is None:
        return state
    return pointer_up(question, state, state.drag.x, state.drag.y, hit_test)


def cancel_drag(state: SessionState) -> SessionState:
    """Drop an in-flight drag without touching placements (e.g. touchcancel)."""
    if state.drag is None:
        return state
    return replace(state, drag=None)
