"""Database-backed essay test repository."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..db.models import EssayQuestionModel, EssayTestModel
from ..db.session import session_scope
from ..errors import StorageError
from ..essay_test import EssayTest, Question, ScoringCriteria


logger = logging.getLogger(__name__)


class EssayTestRepository:
    """Read access to test definitions, plus the upsert used by seeding."""

    def get_by_id(self, test_id: str) -> Optional[EssayTest]:
        try:
            with session_scope(commit=False) as session:
                model = self._load(session, test_id)
                return self._to_domain(model) if model is not None else None
        except SQLAlchemyError as exc:
            logger.exception("Failed to load essay test %s", test_id)
            raise StorageError("essay_tests.get_by_id", test_id) from exc

    def get_all(self) -> List[EssayTest]:
        try:
            with session_scope(commit=False) as session:
                stmt = (
                    select(EssayTestModel)
                    .options(selectinload(EssayTestModel.questions))
                    .order_by(EssayTestModel.created_at)
                )
                rows = session.execute(stmt).scalars().all()
                return [self._to_domain(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.exception("Failed to list essay tests")
            raise StorageError("essay_tests.get_all") from exc

    def save(self, test: EssayTest) -> EssayTest:
        try:
            with session_scope() as session:
                model = self._load(session, test.id)
                if model is None:
                    model = EssayTestModel(id=test.id)
                    session.add(model)
                model.title = test.title
                model.description = test.description
                model.reading_time = test.reading_time
                model.writing_time = test.writing_time
                model.total_points = test.total_points
                model.difficulty = test.difficulty
                model.category = test.category
                model.participants = test.participants
                model.essay_text = test.essay_text
                model.scoring_criteria = test.scoring_criteria.model_dump(mode="json")
                existing = {question.id: question for question in model.questions}
                questions: List[EssayQuestionModel] = []
                for question in test.questions:
                    row = existing.get(question.id) or EssayQuestionModel(id=question.id)
                    row.number = question.number
                    row.title = question.title
                    row.description = question.description
                    row.points = question.points
                    row.character_limit = question.character_limit
                    questions.append(row)
                model.questions = questions
                session.flush()
                logger.info("Saved essay test %s with %d questions", test.id, len(test.questions))
                return self._to_domain(model)
        except SQLAlchemyError as exc:
            logger.exception("Failed to save essay test %s", test.id)
            raise StorageError("essay_tests.save", test.id) from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, session: Session, test_id: str) -> Optional[EssayTestModel]:
        stmt = (
            select(EssayTestModel)
            .options(selectinload(EssayTestModel.questions))
            .where(EssayTestModel.id == test_id)
        )
        return session.execute(stmt).scalar_one_or_none()

    def _to_domain(self, model: EssayTestModel) -> EssayTest:
        return EssayTest(
            id=model.id,
            title=model.title,
            description=model.description,
            reading_time=model.reading_time,
            writing_time=model.writing_time,
            total_points=model.total_points,
            difficulty=model.difficulty,
            category=model.category,
            participants=model.participants,
            essay_text=model.essay_text,
            questions=[
                Question(
                    id=question.id,
                    number=question.number,
                    title=question.title,
                    description=question.description,
                    points=question.points,
                    character_limit=question.character_limit,
                )
                for question in model.questions
            ],
            scoring_criteria=ScoringCriteria.model_validate(model.scoring_criteria or {}),
        )


__all__ = ["EssayTestRepository"]
