"""Database-backed submission repository."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..db.models import SubmissionAnswerModel, SubmissionModel
from ..db.session import session_scope
from ..errors import StorageError
from ..scoring_result import as_utc
from ..submission import Answer, Submission


logger = logging.getLogger(__name__)


class SubmissionRepository:
    """Stores submissions together with their answers.

    Answers are written once, at creation; ``update`` only moves the status.
    """

    def create(self, submission: Submission) -> Submission:
        try:
            with session_scope() as session:
                model = self._to_model(submission)
                session.add(model)
                session.flush()
                logger.info(
                    "Stored submission %s for test %s (%d answers)",
                    submission.id,
                    submission.test_id,
                    len(submission.answers),
                )
                return self._to_domain(model)
        except SQLAlchemyError as exc:
            logger.exception("Failed to store submission %s", submission.id)
            raise StorageError("submissions.create", submission.id) from exc

    def update(self, submission: Submission) -> Submission:
        try:
            with session_scope() as session:
                model = self._load(session, submission.id)
                if model is None:
                    logger.warning("Submission %s was not stored yet; inserting on update", submission.id)
                    model = self._to_model(submission)
                    session.add(model)
                else:
                    model.status = submission.status
                    model.updated_at = submission.updated_at
                session.flush()
                logger.info("Submission %s moved to %s", submission.id, submission.status)
                return self._to_domain(model)
        except SQLAlchemyError as exc:
            logger.exception("Failed to update submission %s", submission.id)
            raise StorageError("submissions.update", submission.id) from exc

    def get_by_id(self, submission_id: str) -> Optional[Submission]:
        try:
            with session_scope(commit=False) as session:
                model = self._load(session, submission_id)
                return self._to_domain(model) if model is not None else None
        except SQLAlchemyError as exc:
            logger.exception("Failed to load submission %s", submission_id)
            raise StorageError("submissions.get_by_id", submission_id) from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, session: Session, submission_id: str) -> Optional[SubmissionModel]:
        stmt = (
            select(SubmissionModel)
            .options(selectinload(SubmissionModel.answers))
            .where(SubmissionModel.id == submission_id)
        )
        return session.execute(stmt).scalar_one_or_none()

    def _to_model(self, submission: Submission) -> SubmissionModel:
        return SubmissionModel(
            id=submission.id,
            test_id=submission.test_id,
            user_id=submission.user_id,
            status=submission.status,
            created_at=submission.created_at,
            updated_at=submission.updated_at,
            answers=[
                SubmissionAnswerModel(
                    id=answer.id,
                    question_id=answer.question_id,
                    position=position,
                    content=answer.content,
                    word_count=answer.word_count,
                )
                for position, answer in enumerate(submission.answers)
            ],
        )

    def _to_domain(self, model: SubmissionModel) -> Submission:
        return Submission(
            id=model.id,
            test_id=model.test_id,
            user_id=model.user_id,
            status=model.status,  # type: ignore[arg-type]
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
            answers=[
                Answer(
                    id=answer.id,
                    submission_id=model.id,
                    question_id=answer.question_id,
                    content=answer.content,
                    word_count=answer.word_count,
                )
                for answer in model.answers
            ],
        )


__all__ = ["SubmissionRepository"]
