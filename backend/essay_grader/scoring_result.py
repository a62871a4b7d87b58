"""Data models for scoring results and their expiration window."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_RESULT_TTL = timedelta(days=30)


class CriteriaScore(BaseModel):
    """Proportional share of a question score for one rubric criterion."""

    criteria_name: str
    score: int = Field(ge=0)
    max_score: int = Field(ge=0)
    comment: str = ""
    reasoning: str = ""


class QuestionScore(BaseModel):
    question_num: int = Field(ge=1)
    score: int = Field(ge=0)
    max_score: int = Field(gt=0)
    percentage: float
    criteria_scores: List[CriteriaScore] = Field(default_factory=list)
    comment: str = ""
    reasoning: str = ""


class ScoringResult(BaseModel):
    """Top-level grading report persisted for one submission."""

    id: str
    submission_id: str
    test_id: str
    test_title: str = ""
    total_score: int = Field(ge=0)
    max_score: int = Field(gt=0)
    percentage: float
    details: List[QuestionScore] = Field(default_factory=list)
    feedback: str = ""
    scored_by: str = "fallback"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        current = now or datetime.now(timezone.utc)
        return current > as_utc(self.expires_at)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def expiration_for(created_at: datetime, ttl: timedelta = DEFAULT_RESULT_TTL) -> datetime:
    return as_utc(created_at) + ttl


__all__ = [
    "CriteriaScore",
    "DEFAULT_RESULT_TTL",
    "QuestionScore",
    "ScoringResult",
    "as_utc",
    "expiration_for",
]
