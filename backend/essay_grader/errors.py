"""Domain-specific exceptions for the essay grading backend.

Routes translate these into HTTP responses; the workflow and the stores raise
them with the ids involved so callers can correlate failures in the logs.
"""

from __future__ import annotations

from typing import Optional


class EssayGraderError(Exception):
    """Base class for all grading backend errors."""


class NotFoundError(EssayGraderError):
    """A test or result does not exist, or the result has expired."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} '{entity_id}' not found")


class ValidationError(EssayGraderError):
    """The submission does not match the shape of the test.

    Raised before anything is persisted, so it is always safe to report back
    to the client as a bad request.
    """

    def __init__(
        self,
        message: str,
        *,
        test_id: Optional[str] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ) -> None:
        self.test_id = test_id
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class ScoringError(EssayGraderError):
    """The scoring engine was handed answers it cannot grade."""

    def __init__(self, message: str, *, submission_id: Optional[str] = None) -> None:
        self.submission_id = submission_id
        super().__init__(message)


class DeadlineExceededError(EssayGraderError):
    """The caller's deadline passed before the workflow finished."""

    def __init__(self, stage: str, *, submission_id: Optional[str] = None) -> None:
        self.stage = stage
        self.submission_id = submission_id
        suffix = f" for submission '{submission_id}'" if submission_id else ""
        super().__init__(f"Deadline exceeded before {stage}{suffix}")


class StorageError(EssayGraderError):
    """A persistence call failed."""

    def __init__(self, operation: str, entity_id: Optional[str] = None) -> None:
        self.operation = operation
        self.entity_id = entity_id
        target = f" ({entity_id})" if entity_id else ""
        super().__init__(f"Storage operation '{operation}' failed{target}")


__all__ = [
    "DeadlineExceededError",
    "EssayGraderError",
    "NotFoundError",
    "ScoringError",
    "StorageError",
    "ValidationError",
]
