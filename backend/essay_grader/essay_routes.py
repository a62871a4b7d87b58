"""Essay test catalogue and submission endpoints."""

from __future__ import annotations

import logging
import time
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from .api_models import (
    EssayTestDetailPayload,
    EssayTestSummaryPayload,
    SubmissionRequest,
    SubmissionResponse,
    essay_test_detail_payload,
    essay_test_summary_payload,
)
from .config import Settings, get_settings
from .errors import EssayGraderError
from .http_errors import http_error
from .submission_workflow import AnswerInput, EssaySubmissionService, get_submission_service


router = APIRouter(prefix="/api/v1", tags=["essay-tests"])
logger = logging.getLogger(__name__)


def submit_answers(
    test_id: str,
    payload: SubmissionRequest,
    service: EssaySubmissionService,
    settings: Settings,
) -> SubmissionResponse:
    deadline = time.monotonic() + settings.submission_timeout_seconds
    answers = [AnswerInput(question_id=item.question_id, content=item.content) for item in payload.answers]
    try:
        summary = service.submit(test_id, answers, user_id=payload.user_id, deadline=deadline)
    except EssayGraderError as exc:
        raise http_error(exc) from exc
    return SubmissionResponse(
        result_id=summary.result_id,
        total_score=summary.total_score,
        max_score=summary.max_score,
        percentage=summary.percentage,
        message=summary.message,
    )


@router.get("/tests", response_model=List[EssayTestSummaryPayload], status_code=status.HTTP_200_OK)
def list_essay_tests(
    service: EssaySubmissionService = Depends(get_submission_service),
) -> List[EssayTestSummaryPayload]:
    try:
        tests = service.list_tests()
    except EssayGraderError as exc:
        raise http_error(exc) from exc
    return [essay_test_summary_payload(test) for test in tests]


@router.get("/tests/{test_id}", response_model=EssayTestDetailPayload, status_code=status.HTTP_200_OK)
def get_essay_test(
    test_id: str,
    service: EssaySubmissionService = Depends(get_submission_service),
) -> EssayTestDetailPayload:
    try:
        test = service.get_test(test_id)
    except EssayGraderError as exc:
        raise http_error(exc) from exc
    return essay_test_detail_payload(test)


@router.post("/tests/{test_id}/submit", response_model=SubmissionResponse, status_code=status.HTTP_200_OK)
def submit_essay_test(
    test_id: str,
    payload: SubmissionRequest,
    service: EssaySubmissionService = Depends(get_submission_service),
    settings: Settings = Depends(get_settings),
) -> SubmissionResponse:
    if payload.test_id and payload.test_id != test_id:
        logger.warning("Submission body test_id %s does not match path %s", payload.test_id, test_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="test_id in the request body does not match the URL.",
        )
    return submit_answers(test_id, payload, service, settings)


__all__ = ["router", "submit_answers"]
