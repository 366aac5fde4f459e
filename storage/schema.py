from __future__ import annotations

"""Schema constants and Pydantic models for the Parquet answer history."""

from datetime import date, datetime, timezone
from typing import Literal, Optional

import pandas as pd
from pandas.api.types import CategoricalDtype
from pydantic import BaseModel, Field, field_validator, model_validator

# --- Constants ---

DIFFICULTIES = {"easy", "medium", "hard"}
QTYPES = {"text", "diagram"}
MODES = {"quiz", "flashcard", "diagram"}
DIAGRAM_KINDS = {"kraft-quorum", "broker-cluster", "partition-replicas", "drag-topology", "heartbeat-timeline"}


def _cat_dtype(categories: set[str]) -> CategoricalDtype:
    return CategoricalDtype(categories=sorted(categories), ordered=False)


DTYPES = {
    # timezone-aware UTC timestamps
    "answered_at": pd.DatetimeTZDtype(tz="UTC"),
    # local calendar day of the answer (ISO), the unit streaks count in
    "day": "string",
    "question_id": "UInt32",
    "category": "string",
    "difficulty": _cat_dtype(DIFFICULTIES),
    "qtype": _cat_dtype(QTYPES),
    "diagram_kind": _cat_dtype(DIAGRAM_KINDS),
    "mode": _cat_dtype(MODES),
    "correct": "boolean",
    "browse": "boolean",
}


# --- Pydantic models ---

class AnswerRow(BaseModel):
    answered_at: datetime
    day: date
    question_id: int = Field(ge=0, le=4294967295)
    category: str
    difficulty: Literal[tuple(DIFFICULTIES)]  # type: ignore[valid-type]
    qtype: Literal[tuple(QTYPES)]  # type: ignore[valid-type]
    diagram_kind: Optional[Literal[tuple(DIAGRAM_KINDS)]] = None  # type: ignore[valid-type]
    mode: Literal[tuple(MODES)]  # type: ignore[valid-type]
    correct: bool
    browse: bool = False

    @field_validator("answered_at")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _kind_matches_type(self):  # type: ignore[override]
        if self.qtype == "diagram" and self.diagram_kind is None:
            raise ValueError("diagram answers need a diagram_kind")
        if self.qtype == "text" and self.diagram_kind is not None:
            raise ValueError("text answers cannot carry a diagram_kind")
        if (self.mode == "diagram") != (self.qtype == "diagram"):
            raise ValueError("mode 'diagram' is used for diagram questions only")
        return self

    def to_record(self) -> dict:
        data = self.model_dump()
        data["day"] = self.day.isoformat()
        return data
