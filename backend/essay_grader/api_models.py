"""Request and response payloads exposed by the HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .essay_test import EssayTest
from .scoring_result import ScoringResult


class QuestionPayload(BaseModel):
    id: str
    number: int
    title: str
    description: str
    points: int
    character_limit: str


class ScoringCriteriaPayload(BaseModel):
    main_thesis: str
    key_points: List[str] = Field(default_factory=list)
    question2_topic: str


class EssayTestSummaryPayload(BaseModel):
    id: str
    title: str
    description: str
    reading_time: str
    writing_time: str
    total_points: int
    difficulty: str
    category: str
    participants: int
    questions: List[QuestionPayload] = Field(default_factory=list)


class EssayTestDetailPayload(EssayTestSummaryPayload):
    essay_text: str
    scoring_criteria: ScoringCriteriaPayload


class AnswerRequest(BaseModel):
    question_id: str = Field(..., min_length=1)
    content: str


class SubmissionRequest(BaseModel):
    test_id: Optional[str] = None
    user_id: Optional[str] = None
    answers: List[AnswerRequest]


class APIEnvelope(BaseModel):
    """Wrapper used by the unversioned routes; unset fields are left out of the JSON."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    message: Optional[str] = None


class SubmissionResponse(BaseModel):
    result_id: str
    total_score: int
    max_score: int
    percentage: float
    message: str


class CriteriaScorePayload(BaseModel):
    criteria_name: str
    score: int
    max_score: int
    comment: str
    reasoning: str


class QuestionScorePayload(BaseModel):
    question_num: int
    score: int
    max_score: int
    percentage: float
    criteria_scores: List[CriteriaScorePayload] = Field(default_factory=list)
    comment: str
    reasoning: str


class ScoringResultPayload(BaseModel):
    id: str
    submission_id: str
    test_id: str
    test_title: str
    total_score: int
    max_score: int
    percentage: float
    details: List[QuestionScorePayload] = Field(default_factory=list)
    feedback: str
    scored_by: str
    created_at: datetime
    expires_at: datetime


def _questions(test: EssayTest) -> List[QuestionPayload]:
    return [QuestionPayload.model_validate(question.model_dump()) for question in test.questions]


def essay_test_summary_payload(test: EssayTest) -> EssayTestSummaryPayload:
    return EssayTestSummaryPayload(
        id=test.id,
        title=test.title,
        description=test.description,
        reading_time=test.reading_time,
        writing_time=test.writing_time,
        total_points=test.total_points,
        difficulty=test.difficulty,
        category=test.category,
        participants=test.participants,
        questions=_questions(test),
    )


def essay_test_detail_payload(test: EssayTest) -> EssayTestDetailPayload:
    summary = essay_test_summary_payload(test)
    return EssayTestDetailPayload(
        **summary.model_dump(),
        essay_text=test.essay_text,
        scoring_criteria=ScoringCriteriaPayload.model_validate(test.scoring_criteria.model_dump()),
    )


def result_payload(result: ScoringResult) -> ScoringResultPayload:
    return ScoringResultPayload.model_validate(result.model_dump())


__all__ = [
    "APIEnvelope",
    "AnswerRequest",
    "CriteriaScorePayload",
    "EssayTestDetailPayload",
    "EssayTestSummaryPayload",
    "QuestionPayload",
    "QuestionScorePayload",
    "ScoringCriteriaPayload",
    "ScoringResultPayload",
    "SubmissionRequest",
    "SubmissionResponse",
    "essay_test_detail_payload",
    "essay_test_summary_payload",
    "result_payload",
]
