"""Translation of domain errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from .errors import (
    DeadlineExceededError,
    EssayGraderError,
    NotFoundError,
    ValidationError,
)


logger = logging.getLogger(__name__)

_NOT_FOUND_DETAIL = {
    "test": "指定されたテストが見つかりません",
    "result": "結果が見つかりません",
}


def http_error(exc: EssayGraderError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        detail = _NOT_FOUND_DETAIL.get(exc.entity_type, str(exc))
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, DeadlineExceededError):
        return HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(exc))
    # ScoringError, StorageError and anything unexpected
    logger.error("Request failed: %s", exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


__all__ = ["http_error"]
