"""Database-backed scoring result repository.

Results expire a fixed window after creation. Expired rows stay in the table
until ``delete_expired`` reaps them, but every read path treats them as absent.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from ..db.models import ScoringResultModel
from ..db.session import session_scope
from ..errors import StorageError
from ..scoring_result import QuestionScore, ScoringResult, as_utc


logger = logging.getLogger(__name__)


class ScoringResultRepository:
    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def create(self, result: ScoringResult) -> ScoringResult:
        try:
            with session_scope() as session:
                model = ScoringResultModel(
                    id=result.id,
                    submission_id=result.submission_id,
                    test_id=result.test_id,
                    test_title=result.test_title,
                    total_score=result.total_score,
                    max_score=result.max_score,
                    percentage=result.percentage,
                    details=[detail.model_dump(mode="json") for detail in result.details],
                    feedback=result.feedback,
                    scored_by=result.scored_by,
                    created_at=as_utc(result.created_at),
                    expires_at=as_utc(result.expires_at),
                )
                session.add(model)
                session.flush()
                logger.info(
                    "Stored scoring result %s for submission %s (expires %s)",
                    result.id,
                    result.submission_id,
                    model.expires_at.isoformat(),
                )
                return self._to_domain(model)
        except SQLAlchemyError as exc:
            logger.exception("Failed to store scoring result %s", result.id)
            raise StorageError("results.create", result.id) from exc

    def get_by_id(self, result_id: str) -> Optional[ScoringResult]:
        try:
            with session_scope(commit=False) as session:
                model = session.get(ScoringResultModel, result_id)
                return self._readable(model)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load scoring result %s", result_id)
            raise StorageError("results.get_by_id", result_id) from exc

    def get_by_submission_id(self, submission_id: str) -> Optional[ScoringResult]:
        try:
            with session_scope(commit=False) as session:
                stmt = (
                    select(ScoringResultModel)
                    .where(ScoringResultModel.submission_id == submission_id)
                    .order_by(ScoringResultModel.created_at.desc())
                    .limit(1)
                )
                model = session.execute(stmt).scalar_one_or_none()
                return self._readable(model)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load scoring result for submission %s", submission_id)
            raise StorageError("results.get_by_submission_id", submission_id) from exc

    def get_all(self) -> List[ScoringResult]:
        now = self._clock()
        try:
            with session_scope(commit=False) as session:
                stmt = (
                    select(ScoringResultModel)
                    .where(ScoringResultModel.expires_at >= now)
                    .order_by(ScoringResultModel.created_at.desc())
                )
                rows = session.execute(stmt).scalars().all()
                return [self._to_domain(row) for row in rows if not self._is_expired(row, now)]
        except SQLAlchemyError as exc:
            logger.exception("Failed to list scoring results")
            raise StorageError("results.get_all") from exc

    def delete_expired(self) -> int:
        now = self._clock()
        try:
            with session_scope() as session:
                outcome = session.execute(
                    delete(ScoringResultModel).where(ScoringResultModel.expires_at < now)
                )
                deleted = outcome.rowcount or 0
                logger.info("Deleted %d expired scoring results", deleted)
                return deleted
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete expired scoring results")
            raise StorageError("results.delete_expired") from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_expired(self, model: ScoringResultModel, now: datetime) -> bool:
        return now > as_utc(model.expires_at)

    def _readable(self, model: Optional[ScoringResultModel]) -> Optional[ScoringResult]:
        if model is None:
            return None
        if self._is_expired(model, self._clock()):
            logger.info("Scoring result %s expired at %s", model.id, model.expires_at)
            return None
        return self._to_domain(model)

    def _to_domain(self, model: ScoringResultModel) -> ScoringResult:
        return ScoringResult(
            id=model.id,
            submission_id=model.submission_id,
            test_id=model.test_id,
            test_title=model.test_title,
            total_score=model.total_score,
            max_score=model.max_score,
            percentage=model.percentage,
            details=[QuestionScore.model_validate(payload) for payload in model.details or []],
            feedback=model.feedback,
            scored_by=model.scored_by,
            created_at=as_utc(model.created_at),
            expires_at=as_utc(model.expires_at),
        )


__all__ = ["ScoringResultRepository"]
