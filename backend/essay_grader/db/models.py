"""ORM models backing the essay grading persistence layer."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from .base import Base, TimestampMixin

JSONType = JSON


class EssayTestModel(TimestampMixin, Base):
    __tablename__ = "essay_tests"

    id: Mapped[str] = mapped_column(String(191), primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    reading_time: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    writing_time: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    total_points: Mapped[int] = mapped_column(Integer, default=100, nullable=False)
    difficulty: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    category: Mapped[str] = mapped_column(String(128), default="", nullable=False)
    participants: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    essay_text: Mapped[str] = mapped_column(Text, default="", nullable=False)
    scoring_criteria: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)

    questions: Mapped[list["EssayQuestionModel"]] = relationship(
        back_populates="test",
        cascade="all, delete-orphan",
        order_by="EssayQuestionModel.number",
    )


class EssayQuestionModel(TimestampMixin, Base):
    __tablename__ = "essay_questions"
    __table_args__ = (UniqueConstraint("test_id", "number", name="uq_essay_question_number"),)

    id: Mapped[str] = mapped_column(String(191), primary_key=True, default=lambda: str(uuid.uuid4()))
    test_id: Mapped[str] = mapped_column(
        String(191), ForeignKey("essay_tests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, default="", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    character_limit: Mapped[str] = mapped_column(String(64), default="", nullable=False)

    test: Mapped[EssayTestModel] = relationship(back_populates="questions")


class SubmissionModel(TimestampMixin, Base):
    __tablename__ = "submissions"
    __table_args__ = (Index("ix_submissions_status", "status"),)

    id: Mapped[str] = mapped_column(String(191), primary_key=True)
    test_id: Mapped[str] = mapped_column(String(191), nullable=False, index=True)
    user_id: Mapped[str | None] = mapped_column(String(191), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(16), default="pending", nullable=False)

    answers: Mapped[list["SubmissionAnswerModel"]] = relationship(
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="SubmissionAnswerModel.position",
    )


class SubmissionAnswerModel(Base):
    __tablename__ = "submission_answers"

    id: Mapped[str] = mapped_column(String(191), primary_key=True)
    submission_id: Mapped[str] = mapped_column(
        String(191), ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question_id: Mapped[str] = mapped_column(String(191), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    submission: Mapped[SubmissionModel] = relationship(back_populates="answers")


class ScoringResultModel(Base):
    __tablename__ = "scoring_results"
    __table_args__ = (
        Index("ix_scoring_results_submission", "submission_id"),
        Index("ix_scoring_results_expires", "expires_at"),
    )

    id: Mapped[str] = mapped_column(String(191), primary_key=True)
    submission_id: Mapped[str] = mapped_column(String(191), nullable=False)
    test_id: Mapped[str] = mapped_column(String(191), nullable=False, index=True)
    test_title: Mapped[str] = mapped_column(Text, default="", nullable=False)
    total_score: Mapped[int] = mapped_column(Integer, nullable=False)
    max_score: Mapped[int] = mapped_column(Integer, nullable=False)
    percentage: Mapped[float] = mapped_column(Float, nullable=False)
    details: Mapped[list[dict]] = mapped_column(JSONType, default=list, nullable=False)
    feedback: Mapped[str] = mapped_column(Text, default="", nullable=False)
    scored_by: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


__all__ = [
    "EssayQuestionModel",
    "EssayTestModel",
    "ScoringResultModel",
    "SubmissionAnswerModel",
    "SubmissionModel",
]
