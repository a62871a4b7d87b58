"""Structural checks applied to a submission before anything is stored."""

from __future__ import annotations

from typing import Sequence

from .errors import ValidationError
from .essay_test import EssayTest


def validate_answer_count(test: EssayTest, answers: Sequence[object]) -> None:
    """Only the answer count is checked; empty or overlong answers are left to the scorer."""
    expected = len(test.questions)
    actual = len(answers)
    if actual != expected:
        raise ValidationError(
            f"Expected {expected} answers, got {actual}.",
            test_id=test.id,
            expected=expected,
            actual=actual,
        )


__all__ = ["validate_answer_count"]
