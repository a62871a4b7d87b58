"""Data models for essay submissions and their answers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

SubmissionStatus = Literal["pending", "scored", "failed"]


def count_characters(content: str) -> int:
    """Length as the number of Unicode code points, which is what Python's len() counts."""
    return len(content)


class Answer(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    submission_id: str
    question_id: str
    content: str = ""
    word_count: int = Field(default=0, ge=0)


class Submission(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    test_id: str
    user_id: Optional[str] = None
    answers: List[Answer] = Field(default_factory=list)
    status: SubmissionStatus = "pending"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def with_status(self, status: SubmissionStatus) -> "Submission":
        return self.model_copy(update={"status": status, "updated_at": datetime.now(timezone.utc)})


__all__ = ["Answer", "Submission", "SubmissionStatus", "count_characters"]
