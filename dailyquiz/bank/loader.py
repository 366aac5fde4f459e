from __future__ import annotations

"""Question bank loader (YAML or JSON).

Loads the ordered question sequence once at startup and validates every
record against the pydantic models in `models.py`.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

import yaml
from pydantic import ValidationError

from .models import Question


class BankError(ValueError):
    """Raised when a bank file cannot be read or a record is invalid."""


def _default_bank_path() -> Path:
    return Path(__file__).resolve().parents[1] / "resources" / "questions.yml"


class QuestionBank(Sequence[Question]):
    """Ordered, immutable sequence of questions with id lookup."""

    def __init__(self, questions: Sequence[Question]) -> None:
        self._questions: tuple[Question, ...] = tuple(questions)
        self._by_id: Dict[int, int] = {}
        for idx, q in enumerate(self._questions):
            if q.id in self._by_id:
                raise BankError(f"Duplicate question id: {q.id}")
            self._by_id[q.id] = idx

    def __len__(self) -> int:
        return len(self._questions)

    def __getitem__(self, index):  # type: ignore[override]
        return self._questions[index]

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def index_of(self, question_id: int) -> int:
        try:
            return self._by_id[int(question_id)]
        except KeyError:
            raise KeyError(f"Unknown question id: {question_id}") from None

    def get(self, question_id: int) -> Question:
        return self._questions[self.index_of(question_id)]

    def diagrams(self) -> List[Question]:
        return [q for q in self._questions if q.is_diagram]


def parse_bank(raw: Any) -> QuestionBank:
    """Validate raw records (list, or mapping with a 'questions' list)."""
    if isinstance(raw, dict):
        raw = raw.get("questions", [])
    if raw is None:
        raw = []
    if not isinstance(raw, list):
        raise BankError("Question bank must be a list of questions")
    questions: List[Question] = []
    for pos, rec in enumerate(raw):
        qid = rec.get("id", f"#{pos}") if isinstance(rec, dict) else f"#{pos}"
        try:
            questions.append(Question.model_validate(rec))
        except ValidationError as exc:
            raise BankError(f"Invalid question {qid}: {exc}") from exc
    return QuestionBank(questions)


def load_bank(path: Optional[str | Path] = None) -> QuestionBank:
    """Load a question bank from YAML/JSON, defaulting to the packaged sample."""
    p = Path(path) if path else _default_bank_path()
    try:
        with p.open("r", encoding="utf-8") as f:
            if p.suffix.lower() == ".json":
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f)
    except FileNotFoundError:
        raise BankError(f"Question bank not found: {p}") from None
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BankError(f"Cannot parse question bank {p}: {exc}") from exc
    return parse_bank(raw)
