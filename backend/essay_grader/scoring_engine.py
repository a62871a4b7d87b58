"""Deterministic heuristic scoring for essay submissions.

This is the fallback grading path: a base score from the answer's length
bucket, a small content bonus from keyword/marker presence, and a rubric
breakdown derived proportionally from the question score.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, List, Optional, Sequence
from uuid import uuid4

from .errors import ScoringError
from .essay_test import EssayTest
from .feedback import compose_feedback
from .scoring_result import DEFAULT_RESULT_TTL, CriteriaScore, QuestionScore, ScoringResult, expiration_for
from .scoring_rules import CANONICAL_RUBRIC, QuestionRubric, ScoringRubric
from .submission import Submission, count_characters


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionAssessment:
    """Everything the engine derives from a single answer."""

    length: int
    base_score: int
    bonus: int
    score: int
    comment: str
    reasoning: str


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def content_bonus(content: str, question: QuestionRubric) -> int:
    bonus = 0
    if question.keyword_bonus is not None:
        rule = question.keyword_bonus
        hits = sum(1 for keyword in rule.keywords if keyword in content)
        bonus += min(hits * rule.points_per_keyword, rule.cap)
    for category in question.marker_categories:
        if any(marker in content for marker in category.markers):
            bonus += category.points
    return bonus


def assess_answer(content: str, question: QuestionRubric) -> QuestionAssessment:
    length = count_characters(content)
    bucket = question.bucket_for(length)
    bonus = content_bonus(content, question)
    return QuestionAssessment(
        length=length,
        base_score=bucket.base_score,
        bonus=bonus,
        score=min(bucket.base_score + bonus, question.max_score),
        comment=bucket.comment,
        reasoning=question.reasoning_template.format(length=length),
    )


def criteria_scores(question_score: int, question: QuestionRubric) -> List[CriteriaScore]:
    # Decimal(str(...)) keeps 0.35 exact so x.5 products round up as intended.
    return [
        CriteriaScore(
            criteria_name=criterion.name,
            score=_round_half_up(Decimal(question_score) * Decimal(str(criterion.weight))),
            max_score=criterion.max_score,
            comment=criterion.comment,
            reasoning=criterion.reasoning,
        )
        for criterion in question.criteria
    ]


def score_question(content: str, question: QuestionRubric) -> QuestionScore:
    assessment = assess_answer(content, question)
    return QuestionScore(
        question_num=question.number,
        score=assessment.score,
        max_score=question.max_score,
        percentage=assessment.score / question.max_score * 100,
        criteria_scores=criteria_scores(assessment.score, question),
        comment=assessment.comment,
        reasoning=assessment.reasoning,
    )


class HeuristicScoringEngine:
    """Grades a submission against a ``ScoringRubric`` without side effects.

    ``clock`` and ``id_factory`` are injectable so results can be reproduced in
    tests; nothing else about the output depends on the environment.
    """

    def __init__(
        self,
        rubric: ScoringRubric = CANONICAL_RUBRIC,
        *,
        result_ttl: timedelta = DEFAULT_RESULT_TTL,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.rubric = rubric
        self.result_ttl = result_ttl
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._id_factory = id_factory or (lambda: str(uuid4()))

    def score_answers(self, contents: Sequence[str]) -> List[QuestionScore]:
        expected = len(self.rubric.questions)
        if len(contents) != expected:
            raise ScoringError(f"Expected {expected} answers, got {len(contents)}.")
        return [score_question(content, question) for content, question in zip(contents, self.rubric.questions)]

    def score_submission(self, submission: Submission, test: EssayTest) -> ScoringResult:
        logger.info("Starting fallback scoring for submission %s (test %s)", submission.id, test.id)
        contents = [answer.content for answer in submission.answers]
        expected = len(self.rubric.questions)
        if len(contents) != expected:
            raise ScoringError(
                f"Expected {expected} answers, got {len(contents)}.",
                submission_id=submission.id,
            )

        details = self.score_answers(contents)
        total_score = sum(detail.score for detail in details)
        max_score = self.rubric.max_score
        percentage = total_score / max_score * 100
        created_at = self._clock()
        result = ScoringResult(
            id=self._id_factory(),
            submission_id=submission.id,
            test_id=test.id,
            test_title=test.title,
            total_score=total_score,
            max_score=max_score,
            percentage=percentage,
            details=details,
            feedback=compose_feedback(
                total_score,
                [count_characters(content) for content in contents],
                self.rubric,
            ),
            scored_by=self.rubric.scored_by,
            created_at=created_at,
            expires_at=expiration_for(created_at, self.result_ttl),
        )
        logger.info(
            "Fallback scoring complete: result=%s total=%d percentage=%.1f",
            result.id,
            total_score,
            percentage,
        )
        return result


__all__ = [
    "HeuristicScoringEngine",
    "QuestionAssessment",
    "assess_answer",
    "content_bonus",
    "criteria_scores",
    "score_question",
]
