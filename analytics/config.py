from __future__ import annotations

"""Analytics configuration (hyperparameters) using Pydantic."""

from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Hyperparameters for answer-history analytics.

    - smoothing_span: EWMA span in days (>1)
    - min_answers: groups with fewer answers are left out of accuracy tables
    """

    smoothing_span: int = Field(7, gt=1)
    min_answers: int = Field(1, ge=1)
