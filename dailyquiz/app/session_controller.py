from __future__ import annotations

"""Session Controller: orchestrates modes, answers, and persistence.

Owns the current `SessionState`, routes user input to the interaction
handlers, runs the single progress-tracking routine when a counted answer
lands, and publishes re-render events. It is front-end agnostic: the CLI
and the tkinter app drive the same methods.
"""

import sys
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from ..bank.models import Question
from ..diagrams.base_diagram import Canvas, DiagramView
from ..interaction import engine, gestures
from ..interaction.gestures import TouchPoint
from ..interaction.state import MODES, SessionState
from ..progress.schema import ProgressRecord
from ..progress.store import ProgressStore
from ..progress.tracker import record_answer
from ..selector.daily import BrowseCursor, EmptyBankError, daily_index, day_of_year
from ..stats.stats import stats_view
from ..util.clock import Clock, SystemClock, local_today
from .events import ANSWER_RECORDED, QUESTION_CHANGED, STATS_CHANGED, EventBus
from .explain import trace as xtrace
from .practice import PracticeSession
from .screen import ScreenView, build_screen


class SessionController:
    def __init__(
        self,
        bank: Sequence[Question],
        store: Optional[ProgressStore] = None,
        *,
        clock: Optional[Clock] = None,
        history: Optional[object] = None,
        bus: Optional[EventBus] = None,
        canvas: Optional[Canvas] = None,
        start_mode: str = "quiz",
    ) -> None:
        self.bank = bank
        self.store = store or ProgressStore()
        self.clock: Clock = clock or SystemClock()
        self.history = history
        self.bus = bus or EventBus()
        self.canvas = canvas or Canvas()
        self.start_mode = start_mode if start_mode in MODES else "quiz"
        self.state = SessionState(mode=self.start_mode)
        self._record: ProgressRecord = ProgressRecord()

    # --- lifecycle ---

    def start(self) -> SessionState:
        self._record = self.store.get()
        try:
            idx = daily_index(self.clock.now(), len(self.bank))
        except EmptyBankError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            xtrace("session_failed", {"error": "empty_bank"})
            self.state = SessionState(mode=self.start_mode, error="empty_bank")
            return self.state
        question = self.bank[idx]
        self.state = SessionState(mode=self.start_mode).with_question(
            question, has_answered=self._answered_today(question)
        )
        xtrace("session_started", {"question": question.id, "index": idx, "answered": self.state.has_answered})
        self.bus.emit(QUESTION_CHANGED, self.state)
        return self.state

    @property
    def question(self) -> Optional[Question]:
        return self.state.question

    @property
    def progress(self) -> ProgressRecord:
        return self._record

    def daily(self) -> Optional[Question]:
        if not len(self.bank):
            return None
        return self.bank[daily_index(self.clock.now(), len(self.bank))]

    def is_daily(self, question: Optional[Question]) -> bool:
        daily = self.daily()
        return question is not None and daily is not None and question.id == daily.id

    def _answered_today(self, question: Question) -> bool:
        """Persisted answered state; only the daily question carries one."""
        rec = self._record
        return (
            self.is_daily(question)
            and question.id in rec.answered_questions
            and rec.last_answered_date == local_today(self.clock.now())
        )

    # --- dispatch ---

    def _dispatch(self, name: str, handler: Callable[[Question, SessionState], SessionState], path: str) -> SessionState:
        question = self.state.question
        if question is None or self.state.error:
            return self.state
        before = self.state
        try:
            after = handler(question, before)
        except Exception as exc:
            print(f"[WARN] {name} failed: {exc}")
            xtrace("handler_failed", {"handler": name, "error": repr(exc)})
            return self.state
        self.state = after
        if not before.has_answered and after.has_answered and after.verdict is not None:
            self._count_answer(question, after, path)
        return self.state

    def _count_answer(self, question: Question, state: SessionState, path: str) -> None:
        is_correct = bool(state.verdict)
        try:
            self._record = record_answer(self.store, question.id, is_correct, self.clock)
        except OSError as exc:
            print(f"[WARN] Could not save progress: {exc}")
            return
        self._append_history(question, state, path, is_correct)
        self.bus.emit(ANSWER_RECORDED, {"question": question.id, "correct": is_correct, "mode": path})
        self.bus.emit(STATS_CHANGED, stats_view(self._record))

    def _append_history(self, question: Question, state: SessionState, path: str, is_correct: bool) -> None:
        if self.history is None:
            return
        # Imported here so the core runs without the Parquet stack loaded.
        from storage.schema import AnswerRow

        now = self.clock.now()
        row = AnswerRow(
            answered_at=now,
            day=local_today(now),
            question_id=question.id,
            category=question.category,
            difficulty=question.difficulty,
            qtype=question.type,
            diagram_kind=question.diagram.type if question.diagram is not None else None,
            mode=path,
            correct=is_correct,
            browse=state.browse_mode,
        )
        try:
            self.history.append(row)
        except Exception as exc:
            print(f"[WARN] Could not append answer history: {exc}")

    # --- text questions ---

    def set_mode(self, mode: str) -> SessionState:
        return self._dispatch("set_mode", lambda q, s: engine.set_mode(q, s, mode), "quiz")

    def select_option(self, index: int) -> SessionState:
        return self._dispatch("select_option", lambda q, s: engine.select_option(q, s, index), "quiz")

    def reveal_flashcard(self) -> SessionState:
        return self._dispatch("reveal_flashcard", engine.reveal_flashcard, "flashcard")

    # --- diagrams ---

    def diagram_view(self) -> Optional[DiagramView]:
        q = self.state.question
        if q is None or not q.is_diagram:
            return None
        return engine.render_diagram(q, self.state, self.canvas)

    def click_entity(self, entity_id: str) -> SessionState:
        return self._dispatch("click_entity", lambda q, s: engine.click_entity(q, s, str(entity_id)), "diagram")

    def click_at(self, x: float, y: float) -> SessionState:
        view = self.diagram_view()
        entity_id = view.pick_selectable(x, y) if view is not None else None
        if entity_id is None:
            return self.state
        return self.click_entity(entity_id)

    def submit(self) -> SessionState:
        return self._dispatch("submit", engine.submit, "diagram")

    def pointer_down(self, x: float, y: float) -> SessionState:
        view = self.diagram_view()
        if view is None:
            return self.state
        return self._dispatch("pointer_down", lambda q, s: gestures.pointer_down(q, s, x, y, view.pick_item), "diagram")

    def pointer_move(self, x: float, y: float) -> SessionState:
        view = self.diagram_view()
        if view is None:
            return self.state
        return self._dispatch("pointer_move", lambda q, s: gestures.pointer_move(q, s, x, y, view.hit_test), "diagram")

    def pointer_up(self, x: float, y: float) -> SessionState:
        view = self.diagram_view()
        if view is None:
            return self.state
        return self._dispatch("pointer_up", lambda q, s: gestures.pointer_up(q, s, x, y, view.hit_test), "diagram")

    def touch_start(self, touches: Sequence[TouchPoint]) -> SessionState:
        view = self.diagram_view()
        if view is None:
            return self.state
        return self._dispatch("touch_start", lambda q, s: gestures.touch_start(q, s, touches, view.pick_item), "diagram")

    def touch_move(self, touches: Sequence[TouchPoint]) -> SessionState:
        view = self.diagram_view()
        if view is None:
            return self.state
        return self._dispatch("touch_move", lambda q, s: gestures.touch_move(q, s, touches, view.hit_test), "diagram")

    def touch_end(self) -> SessionState:
        view = self.diagram_view()
        if view is None:
            return self.state
        return self._dispatch("touch_end", lambda q, s: gestures.touch_end(q, s, view.hit_test), "diagram")

    def cancel_drag(self) -> SessionState:
        self.state = gestures.cancel_drag(self.state)
        return self.state

    # --- browse ---

    def _show(self, question: Question, *, browse_mode: bool, browse_index: int) -> SessionState:
        self.state = replace(
            self.state.with_question(question, has_answered=self._answered_today(question)),
            browse_mode=browse_mode,
            browse_index=browse_index,
        )
        xtrace("question_changed", {"question": question.id, "browse": browse_mode, "index": browse_index})
        self.bus.emit(QUESTION_CHANGED, self.state)
        return self.state

    def enter_browse(self, index: Optional[int] = None) -> SessionState:
        if not len(self.bank) or self.state.error:
            return self.state
        if index is None:
            index = daily_index(self.clock.now(), len(self.bank))
        cursor = BrowseCursor(index, len(self.bank))
        return self._show(self.bank[cursor.index], browse_mode=True, browse_index=cursor.index)

    def exit_browse(self) -> SessionState:
        daily = self.daily()
        if daily is None or not self.state.browse_mode:
            return self.state
        return self._show(daily, browse_mode=False, browse_index=0)

    def _cursor(self) -> BrowseCursor:
        return BrowseCursor(self.state.browse_index, len(self.bank))

    def browse_next(self) -> SessionState:
        return self.browse_jump(self._cursor().next().index)

    def browse_prev(self) -> SessionState:
        return self.browse_jump(self._cursor().prev().index)

    def browse_jump(self, index: int) -> SessionState:
        if not self.state.browse_mode:
            return self.state
        cursor = self._cursor().jump_to(index)
        return self._show(self.bank[cursor.index], browse_mode=True, browse_index=cursor.index)

    # --- practice ---

    def question_list(self) -> List[dict]:
        answered = set(self._record.answered_questions)
        return [
            {
                "id": q.id,
                "category": q.category,
                "difficulty": q.difficulty,
                "type": q.type,
                "question": q.question,
                "answered": q.id in answered,
            }
            for q in self.bank
        ]

    def practice(self, question_id: int) -> PracticeSession:
        """Open a no-stakes answer surface; it never touches stored progress."""
        for question in self.bank:
            if question.id == int(question_id):
                return PracticeSession(question, canvas=self.canvas)
        raise KeyError(f"Unknown question id: {question_id}")

    # --- render ---

    def render(self) -> ScreenView:
        now = self.clock.now()
        return build_screen(
            self.state.question,
            self.state,
            day_label=f"Day {day_of_year(now)} of 365",
            stats=stats_view(self._record),
            canvas=self.canvas,
            last_answer_correct=self._record.last_answer_correct,
            bank_size=len(self.bank),
        )
