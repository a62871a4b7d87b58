"""Scoring result lookup endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from .api_models import ScoringResultPayload, result_payload
from .errors import EssayGraderError
from .http_errors import http_error
from .submission_workflow import EssaySubmissionService, get_submission_service


router = APIRouter(prefix="/api/v1", tags=["results"])


@router.get("/results", response_model=List[ScoringResultPayload], status_code=status.HTTP_200_OK)
def list_results(
    service: EssaySubmissionService = Depends(get_submission_service),
) -> List[ScoringResultPayload]:
    try:
        results = service.list_results()
    except EssayGraderError as exc:
        raise http_error(exc) from exc
    return [result_payload(result) for result in results]


@router.get("/results/{result_id}", response_model=ScoringResultPayload, status_code=status.HTTP_200_OK)
def get_result(
    result_id: str,
    service: EssaySubmissionService = Depends(get_submission_service),
) -> ScoringResultPayload:
    try:
        result = service.get_result(result_id)
    except EssayGraderError as exc:
        raise http_error(exc) from exc
    return result_payload(result)


@router.get(
    "/submissions/{submission_id}/result",
    response_model=ScoringResultPayload,
    status_code=status.HTTP_200_OK,
)
def get_submission_result(
    submission_id: str,
    service: EssaySubmissionService = Depends(get_submission_service),
) -> ScoringResultPayload:
    try:
        result = service.get_result_for_submission(submission_id)
    except EssayGraderError as exc:
        raise http_error(exc) from exc
    return result_payload(result)


__all__ = ["router"]
