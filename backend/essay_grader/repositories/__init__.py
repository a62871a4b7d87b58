"""Database-backed stores for tests, submissions and scoring results."""

from .contracts import EssayTestStore, ResultStore, SubmissionStore
from .essay_tests import EssayTestRepository
from .results import ScoringResultRepository
from .submissions import SubmissionRepository

__all__ = [
    "EssayTestRepository",
    "EssayTestStore",
    "ResultStore",
    "ScoringResultRepository",
    "SubmissionRepository",
    "SubmissionStore",
]
