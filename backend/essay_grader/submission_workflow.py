"""Submission-to-result workflow: validate, persist, score, persist, update status."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel

from .answer_validation import validate_answer_count
from .config import get_settings
from .errors import DeadlineExceededError, NotFoundError, ScoringError, StorageError
from .essay_test import EssayTest
from .repositories import (
    EssayTestRepository,
    EssayTestStore,
    ResultStore,
    ScoringResultRepository,
    SubmissionRepository,
    SubmissionStore,
)
from .scoring_engine import HeuristicScoringEngine
from .scoring_result import ScoringResult
from .submission import Answer, Submission, SubmissionStatus, count_characters


logger = logging.getLogger(__name__)

COMPLETION_MESSAGE = "採点が完了しました"


class AnswerInput(BaseModel):
    question_id: str
    content: str = ""


class SubmissionSummary(BaseModel):
    result_id: str
    submission_id: str
    total_score: int
    max_score: int
    percentage: float
    message: str = COMPLETION_MESSAGE


class EssaySubmissionService:
    """Runs one submission through the pending -> scored | failed state machine.

    Each store call is its own transaction. ``deadline`` is an absolute
    ``time.monotonic()`` value checked before the submission and the result are
    stored; a submission that already exists is marked failed rather than left
    pending.
    """

    def __init__(
        self,
        tests: EssayTestStore,
        submissions: SubmissionStore,
        results: ResultStore,
        engine: Optional[HeuristicScoringEngine] = None,
        *,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.tests = tests
        self.submissions = submissions
        self.results = results
        self.engine = engine or HeuristicScoringEngine()
        self._monotonic = monotonic

    def submit(
        self,
        test_id: str,
        answers: Sequence[AnswerInput],
        *,
        user_id: Optional[str] = None,
        deadline: Optional[float] = None,
    ) -> SubmissionSummary:
        logger.info(
            "Essay submission received for test %s (user=%s answers=%d)",
            test_id,
            user_id or "-",
            len(answers),
        )
        test = self.tests.get_by_id(test_id)
        if test is None:
            logger.warning("Essay test %s not found", test_id)
            raise NotFoundError("test", test_id)

        validate_answer_count(test, answers)
        self._check_deadline(deadline, "storing the submission")

        submission = self._build_submission(test_id, user_id, answers)
        self.submissions.create(submission)
        logger.info("Stored pending submission %s", submission.id)

        try:
            result = self.engine.score_submission(submission, test)
        except ScoringError as exc:
            if exc.submission_id is None:
                exc.submission_id = submission.id
            logger.error("Scoring failed for submission %s: %s", submission.id, exc)
            self._mark_failed_quietly(submission)
            raise
        except Exception:  # noqa: BLE001
            logger.exception("Scoring crashed for submission %s", submission.id)
            self._mark_failed_quietly(submission)
            raise

        self._check_deadline(deadline, "storing the result", submission)
        try:
            self.results.create(result)
        except StorageError:
            logger.error("Could not store result for submission %s; marking it failed", submission.id)
            self._mark_failed_quietly(submission)
            raise

        self._mark(submission, "scored")
        logger.info(
            "Submission %s scored: result=%s total=%d percentage=%.1f",
            submission.id,
            result.id,
            result.total_score,
            result.percentage,
        )
        return SubmissionSummary(
            result_id=result.id,
            submission_id=submission.id,
            total_score=result.total_score,
            max_score=result.max_score,
            percentage=result.percentage,
        )

    def list_tests(self) -> List[EssayTest]:
        return self.tests.get_all()

    def get_test(self, test_id: str) -> EssayTest:
        test = self.tests.get_by_id(test_id)
        if test is None:
            raise NotFoundError("test", test_id)
        return test

    def get_result(self, result_id: str) -> ScoringResult:
        result = self.results.get_by_id(result_id)
        if result is None:
            raise NotFoundError("result", result_id)
        return result

    def get_result_for_submission(self, submission_id: str) -> ScoringResult:
        result = self.results.get_by_submission_id(submission_id)
        if result is None:
            raise NotFoundError("result", submission_id)
        return result

    def list_results(self) -> List[ScoringResult]:
        return self.results.get_all()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _build_submission(
        self,
        test_id: str,
        user_id: Optional[str],
        answers: Sequence[AnswerInput],
    ) -> Submission:
        submission = Submission(test_id=test_id, user_id=user_id, status="pending")
        submission.answers = [
            Answer(
                submission_id=submission.id,
                question_id=answer.question_id,
                content=answer.content,
                word_count=count_characters(answer.content),
            )
            for answer in answers
        ]
        for number, answer in enumerate(submission.answers, start=1):
            logger.debug(
                "Answer %d for submission %s: question=%s characters=%d",
                number,
                submission.id,
                answer.question_id,
                answer.word_count,
            )
        return submission

    def _mark(self, submission: Submission, status: SubmissionStatus) -> Submission:
        return self.submissions.update(submission.with_status(status))

    def _mark_failed_quietly(self, submission: Submission) -> None:
        try:
            self._mark(submission, "failed")
        except StorageError:
            logger.exception("Could not mark submission %s as failed", submission.id)

    def _check_deadline(
        self,
        deadline: Optional[float],
        stage: str,
        submission: Optional[Submission] = None,
    ) -> None:
        if deadline is None or self._monotonic() < deadline:
            return
        submission_id = submission.id if submission else None
        logger.warning("Deadline exceeded before %s (submission=%s)", stage, submission_id or "-")
        if submission is not None:
            self._mark_failed_quietly(submission)
        raise DeadlineExceededError(stage, submission_id=submission_id)


_service: Optional[EssaySubmissionService] = None


def get_submission_service() -> EssaySubmissionService:
    global _service
    if _service is None:
        settings = get_settings()
        _service = EssaySubmissionService(
            tests=EssayTestRepository(),
            submissions=SubmissionRepository(),
            results=ScoringResultRepository(),
            engine=HeuristicScoringEngine(result_ttl=timedelta(days=settings.result_ttl_days)),
        )
    return _service


def reset_submission_service() -> None:
    global _service
    _service = None


__all__ = [
    "AnswerInput",
    "COMPLETION_MESSAGE",
    "EssaySubmissionService",
    "SubmissionSummary",
    "get_submission_service",
    "reset_submission_service",
]
