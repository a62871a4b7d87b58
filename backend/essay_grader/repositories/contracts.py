"""Storage contracts the submission workflow depends on."""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..essay_test import EssayTest
from ..scoring_result import ScoringResult
from ..submission import Submission


class EssayTestStore(Protocol):
    def get_by_id(self, test_id: str) -> Optional[EssayTest]:  # pragma: no cover - protocol definition
        ...

    def get_all(self) -> List[EssayTest]:  # pragma: no cover - protocol definition
        ...

    def save(self, test: EssayTest) -> EssayTest:  # pragma: no cover - protocol definition
        ...


class SubmissionStore(Protocol):
    def create(self, submission: Submission) -> Submission:  # pragma: no cover - protocol definition
        ...

    def update(self, submission: Submission) -> Submission:  # pragma: no cover - protocol definition
        ...

    def get_by_id(self, submission_id: str) -> Optional[Submission]:  # pragma: no cover - protocol definition
        ...


class ResultStore(Protocol):
    def create(self, result: ScoringResult) -> ScoringResult:  # pragma: no cover - protocol definition
        ...

    def get_by_id(self, result_id: str) -> Optional[ScoringResult]:  # pragma: no cover - protocol definition
        ...

    def get_by_submission_id(self, submission_id: str) -> Optional[ScoringResult]:  # pragma: no cover
        ...

    def get_all(self) -> List[ScoringResult]:  # pragma: no cover - protocol definition
        ...

    def delete_expired(self) -> int:  # pragma: no cover - protocol definition
        ...


__all__ = ["EssayTestStore", "ResultStore", "SubmissionStore"]
