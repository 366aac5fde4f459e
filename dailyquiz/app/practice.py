from __future__ import annotations

"""Practice surface: answer any question with visual feedback only.

Holds its own `SessionState` and uses the same handlers as the session
controller, but has no progress store: nothing it does is counted.
"""

from typing import Optional, Sequence

from ..bank.models import Question
from ..diagrams.base_diagram import Canvas, DiagramView
from ..interaction import engine, gestures
from ..interaction.gestures import TouchPoint
from ..interaction.state import SessionState
from .screen import ScreenView, build_screen


class PracticeSession:
    def __init__(self, question: Question, canvas: Optional[Canvas] = None) -> None:
        self.question = question
        self.canvas = canvas or Canvas()
        self.state = SessionState().with_question(question, has_answered=False)

    def reset(self) -> SessionState:
        self.state = SessionState(mode=self.state.mode).with_question(self.question, has_answered=False)
        return self.state

    @property
    def verdict(self) -> Optional[bool]:
        return self.state.verdict

    def set_mode(self, mode: str) -> SessionState:
        self.state = engine.set_mode(self.question, self.state, mode)
        return self.state

    def select_option(self, index: int) -> SessionState:
        self.state = engine.select_option(self.question, self.state, index)
        return self.state

    def reveal_flashcard(self) -> SessionState:
        self.state = engine.reveal_flashcard(self.question, self.state)
        return self.state

    def click_entity(self, entity_id: str) -> SessionState:
        self.state = engine.click_entity(self.question, self.state, str(entity_id))
        return self.state

    def submit(self) -> SessionState:
        self.state = engine.submit(self.question, self.state)
        return self.state

    def diagram_view(self) -> Optional[DiagramView]:
        if not self.question.is_diagram:
            return None
        return engine.render_diagram(self.question, self.state, self.canvas)

    def pointer_down(self, x: float, y: float) -> SessionState:
        view = self.diagram_view()
        if view is not None:
            self.state = gestures.pointer_down(self.question, self.state, x, y, view.pick_item)
        return self.state

    def pointer_move(self, x: float, y: float) -> SessionState:
        view = self.diagram_view()
        if view is not None:
            self.state = gestures.pointer_move(self.question, self.state, x, y, view.hit_test)
        return self.state

    def pointer_up(self, x: float, y: float) -> SessionState:
        view = self.diagram_view()
        if view is not None:
            self.state = gestures.pointer_up(self.question, self.state, x, y, view.hit_test)
        return self.state

    def touch_start(self, touches: Sequence[TouchPoint]) -> SessionState:
        view = self.diagram_view()
        if view is not None:
            self.state = gestures.touch_start(self.question, self.state, touches, view.pick_item)
        return self.state

    def touch_move(self, touches: Sequence[TouchPoint]) -> SessionState:
        view = self.diagram_view()
        if view is not None:
            self.state = gestures.touch_move(self.question, self.state, touches, view.hit_test)
        return self.state

    def touch_end(self) -> SessionState:
        view = self.diagram_view()
        if view is not None:
            self.state = gestures.touch_end(self.question, self.state, view.hit_test)
        return self.state

    def render(self) -> ScreenView:
        return build_screen(self.question, self.state, canvas=self.canvas)
