from __future__ import annotations

"""The one routine that turns an answer into updated progress.

Every counted answer (quiz option, flashcard reveal, diagram submit) goes
through `record_answer`; nothing else mutates the stored record.
"""

from ..app.explain import trace as xtrace
from ..util.clock import Clock, SystemClock, local_today, local_yesterday
from .schema import ProgressRecord
from .store import ProgressStore


def apply_answer(record: ProgressRecord, question_id: int, is_correct: bool, clock: Clock) -> ProgressRecord:
    """Return a copy of `record` with one answer applied (streak rule included)."""
    now = clock.now()
    today = local_today(now)
    yesterday = local_yesterday(now)

    streak = record.streak
    if record.last_answered_date == yesterday:
        streak += 1
    elif record.last_answered_date != today:
        streak = 1

    answered = list(record.answered_questions)
    if question_id not in answered:
        answered.append(question_id)

    return ProgressRecord(
        answered_questions=answered,
        last_answered_date=today,
        streak=streak,
        correct_count=record.correct_count + (1 if is_correct else 0),
        total_answered=record.total_answered + 1,
        last_answer_correct=bool(is_correct),
    )


def record_answer(store: ProgressStore, question_id: int, is_correct: bool, clock: Clock | None = None) -> ProgressRecord:
    """Read-modify-write the stored record for one answer and return the result."""
    updated = apply_answer(store.get(), int(question_id), is_correct, clock or SystemClock())
    store.set(updated)
    xtrace(
        "answer_recorded",
        {
            "question": question_id,
            "correct": bool(is_correct),
            "streak": updated.streak,
            "total": updated.total_answered,
        },
    )
    return updated
