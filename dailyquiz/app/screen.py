from __future__ import annotations

"""Screen view: the whole render description for one question.

`build_screen` is a pure function of the question, the session state and a
few display inputs. Front ends (console, tkinter) only draw what it returns.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..bank.models import Question, category_display
from ..diagrams.base_diagram import Canvas, DiagramView
from ..interaction.checker import can_submit
from ..interaction.engine import render_diagram
from ..interaction.state import SessionState
from ..stats.stats import StatsView


@dataclass(frozen=True)
class OptionView:
    index: int
    letter: str
    text: str
    classes: Tuple[str, ...]
    disabled: bool


@dataclass(frozen=True)
class FeedbackView:
    visible: bool
    correct: Optional[bool]
    header: str
    explanation: str
    docs_link: Optional[str]


@dataclass(frozen=True)
class ScreenView:
    question_id: Optional[int]
    category: str = ""
    category_label: str = ""
    difficulty: str = ""
    day_label: str = ""
    question_text: str = ""
    qtype: str = "text"
    mode: str = "quiz"
    options: Tuple[OptionView, ...] = ()
    flashcard_revealed: bool = False
    answer_text: str = ""
    feedback: Optional[FeedbackView] = None
    diagram: Optional[DiagramView] = None
    stats: Optional[StatsView] = None
    has_answered: bool = False
    submit_enabled: bool = False
    browse_mode: bool = False
    browse_position: Optional[Tuple[int, int]] = None
    error: Optional[str] = None


def _option_views(question: Question, state: SessionState) -> Tuple[OptionView, ...]:
    out = []
    for i, text in enumerate(question.options):
        classes: Tuple[str, ...] = ("option",)
        if state.has_answered:
            if i == question.correct:
                classes = ("option", "correct")
            elif i == state.selected_option:
                classes = ("option", "incorrect")
        out.append(OptionView(index=i, letter=chr(65 + i), text=text, classes=classes, disabled=state.has_answered))
    return tuple(out)


def _feedback(question: Question, state: SessionState, last_answer_correct: Optional[bool]) -> FeedbackView:
    if not state.has_answered:
        return FeedbackView(False, None, "", question.explanation, question.docs_link)
    # No verdict in this render cycle means a revisit: use the stored outcome.
    correct = state.verdict if state.verdict is not None else last_answer_correct
    if correct is None:
        header = ""
    else:
        header = "Correct!" if correct else "Not quite!"
    return FeedbackView(True, correct, header, question.explanation, question.docs_link)


def build_screen(
    question: Optional[Question],
    state: SessionState,
    *,
    day_label: str = "",
    stats: Optional[StatsView] = None,
    canvas: Optional[Canvas] = None,
    last_answer_correct: Optional[bool] = None,
    bank_size: int = 0,
) -> ScreenView:
    if question is None:
        return ScreenView(question_id=None, stats=stats, error=state.error, day_label=day_label)
    browse_position = (state.browse_index + 1, bank_size) if state.browse_mode else None
    return ScreenView(
        question_id=question.id,
        category=question.category,
        category_label=category_display(question.category),
        difficulty=question.difficulty,
        day_label=day_label,
        question_text=question.question,
        qtype=question.type,
        mode="diagram" if question.is_diagram else state.mode,
        options=() if question.is_diagram else _option_views(question, state),
        flashcard_revealed=state.revealed,
        answer_text=question.answer_text,
        feedback=_feedback(question, state, last_answer_correct),
        diagram=render_diagram(question, state, canvas) if question.is_diagram else None,
        stats=stats,
        has_answered=state.has_answered,
        submit_enabled=can_submit(question, state),
        browse_mode=state.browse_mode,
        browse_position=browse_position,
        error=state.error,
    )
