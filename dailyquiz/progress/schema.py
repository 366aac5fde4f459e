from __future__ import annotations

"""Pydantic model for the persisted progress record.

Serialized shape (camelCase, one JSON object):

{
  "answeredQuestions": [3, 7],
  "lastAnsweredDate": "2026-10-18",
  "streak": 2,
  "correctCount": 1,
  "totalAnswered": 2,
  "lastAnswerCorrect": true
}
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

STORAGE_KEY = "kafkaQuiz"


class ProgressRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    answered_questions: List[int] = Field(default_factory=list, alias="answeredQuestions")
    last_answered_date: Optional[date] = Field(default=None, alias="lastAnsweredDate")
    streak: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0, alias="correctCount")
    total_answered: int = Field(default=0, ge=0, alias="totalAnswered")
    last_answer_correct: Optional[bool] = Field(default=None, alias="lastAnswerCorrect")

    @field_validator("answered_questions")
    @classmethod
    def _dedupe(cls, v: List[int]) -> List[int]:
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def _correct_le_total(self):  # type: ignore[override]
        if self.correct_count > self.total_answered:
            raise ValueError("correctCount must be <= totalAnswered")
        return self

    @property
    def accuracy(self) -> int:
        """Accuracy in whole percent, rounded half up; 0 before any answer."""
        if self.total_answered <= 0:
            return 0
        return int(self.correct_count * 100 / self.total_answered + 0.5)

    def to_blob(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
