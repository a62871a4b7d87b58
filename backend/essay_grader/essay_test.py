"""Data models for essay test definitions."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator


class Question(BaseModel):
    id: str
    number: int = Field(ge=1)
    title: str = ""
    description: str = ""
    points: int = Field(default=0, ge=0)
    character_limit: str = ""


class ScoringCriteria(BaseModel):
    main_thesis: str = ""
    key_points: List[str] = Field(default_factory=list)
    question2_topic: str = ""


class EssayTest(BaseModel):
    """A fixed test definition: source essay, ordered questions and grading notes."""

    id: str
    title: str
    description: str = ""
    reading_time: str = ""
    writing_time: str = ""
    total_points: int = Field(default=100, ge=0)
    difficulty: str = ""
    category: str = ""
    participants: int = Field(default=0, ge=0)
    essay_text: str = ""
    questions: List[Question] = Field(default_factory=list)
    scoring_criteria: ScoringCriteria = Field(default_factory=ScoringCriteria)

    @field_validator("questions")
    @classmethod
    def _questions_contiguous(cls, value: List[Question]) -> List[Question]:
        ordered = sorted(value, key=lambda question: question.number)
        numbers = [question.number for question in ordered]
        if numbers != list(range(1, len(ordered) + 1)):
            raise ValueError(f"Question numbers must be contiguous from 1, got {numbers}.")
        return ordered


__all__ = ["EssayTest", "Question", "ScoringCriteria"]
