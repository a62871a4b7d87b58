"""Unversioned aliases kept for clients of the first release.

These clients read ``{success, data, error, message}`` envelopes rather than
bare payloads, so every response here, errors included, is wrapped.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from .api_models import APIEnvelope, SubmissionRequest
from .config import Settings, get_settings
from .essay_routes import get_essay_test, list_essay_tests, submit_answers
from .result_routes import get_result
from .submission_workflow import EssaySubmissionService, get_submission_service


router = APIRouter(prefix="/api", tags=["legacy"])
logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "リクエストが無効です"
SUBMITTED_MESSAGE = "小論文が正常に提出されました"


def envelope_response(status_code: int, error: str) -> JSONResponse:
    body = APIEnvelope(success=False, error=error).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _failure(exc: HTTPException, fallback: str) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = str(exc.detail)
    elif exc.status_code == status.HTTP_400_BAD_REQUEST:
        error = INVALID_REQUEST_MESSAGE
    else:
        error = fallback
    return envelope_response(exc.status_code, error)


def _wrapped(call: Callable[[], Any], fallback: str, message: Optional[str] = None) -> Any:
    try:
        payload = call()
    except HTTPException as exc:
        logger.warning("Legacy request failed (%s): %s", exc.status_code, exc.detail)
        return _failure(exc, fallback)
    if isinstance(payload, list):
        data: Any = [item.model_dump(mode="json") for item in payload]
    else:
        data = payload.model_dump(mode="json")
    return APIEnvelope(success=True, data=data, message=message)


@router.get(
    "/essay-test",
    response_model=APIEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def legacy_list_essay_tests(
    service: EssaySubmissionService = Depends(get_submission_service),
) -> Any:
    return _wrapped(lambda: list_essay_tests(service=service), "テストの取得に失敗しました")


@router.get(
    "/essay-test/{test_id}",
    response_model=APIEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def legacy_get_essay_test(
    test_id: str,
    service: EssaySubmissionService = Depends(get_submission_service),
) -> Any:
    return _wrapped(lambda: get_essay_test(test_id, service=service), "テストの取得に失敗しました")


@router.post(
    "/essay-test/submit",
    response_model=APIEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def legacy_submit_essay_test(
    payload: SubmissionRequest,
    service: EssaySubmissionService = Depends(get_submission_service),
    settings: Settings = Depends(get_settings),
) -> Any:
    if not payload.test_id:
        return envelope_response(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_MESSAGE)
    test_id = payload.test_id
    return _wrapped(
        lambda: submit_answers(test_id, payload, service, settings),
        "小論文の提出に失敗しました",
        message=SUBMITTED_MESSAGE,
    )


@router.get(
    "/results/{result_id}",
    response_model=APIEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def legacy_get_result(
    result_id: str,
    service: EssaySubmissionService = Depends(get_submission_service),
) -> Any:
    return _wrapped(lambda: get_result(result_id, service=service), "結果の取得に失敗しました")


__all__ = ["INVALID_REQUEST_MESSAGE", "envelope_response", "router"]
