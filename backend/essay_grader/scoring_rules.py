"""Immutable rubric tables for the heuristic (fallback) essay scorer.

Every threshold, keyword and weight the scorer uses lives here as frozen data,
so the engine itself stays a pure function of (answers, rubric). The canonical
rubric covers the two-question summary/opinion test; other tests can supply
their own ``ScoringRubric``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ScoringError


@dataclass(frozen=True)
class LengthBucket:
    """Inclusive character-count range mapped to a base score and comment.

    Buckets are evaluated top-down and the first match wins, so a bucket with
    only a lower bound catches everything the buckets above it did not.
    """

    min_length: int
    base_score: int
    comment: str
    max_length: Optional[int] = None

    def matches(self, length: int) -> bool:
        if length < self.min_length:
            return False
        return self.max_length is None or length <= self.max_length


@dataclass(frozen=True)
class KeywordBonus:
    """+points per distinct keyword present, capped."""

    keywords: Tuple[str, ...]
    points_per_keyword: int = 1
    cap: int = 5


@dataclass(frozen=True)
class MarkerCategory:
    """A structural signal worth a flat bonus if any of its markers appears."""

    name: str
    markers: Tuple[str, ...]
    points: int = 2


@dataclass(frozen=True)
class CriterionWeight:
    key: str
    name: str
    weight: float
    max_score: int
    comment: str
    reasoning: str


@dataclass(frozen=True)
class QuestionRubric:
    number: int
    role: str
    label: str
    max_score: int
    buckets: Tuple[LengthBucket, ...]
    criteria: Tuple[CriterionWeight, ...]
    ideal_range: Tuple[int, int]
    reasoning_template: str
    in_range_remark: str
    out_of_range_remark: str
    keyword_bonus: Optional[KeywordBonus] = None
    marker_categories: Tuple[MarkerCategory, ...] = ()

    def bucket_for(self, length: int) -> LengthBucket:
        for bucket in self.buckets:
            if bucket.matches(length):
                return bucket
        raise ScoringError(f"No length bucket covers {length} characters for question {self.number}.")

    def in_ideal_range(self, length: int) -> bool:
        low, high = self.ideal_range
        return low <= length <= high


@dataclass(frozen=True)
class FeedbackBanner:
    min_score: int
    text: str


@dataclass(frozen=True)
class ScoringRubric:
    questions: Tuple[QuestionRubric, ...]
    banners: Tuple[FeedbackBanner, ...]
    improvement_points: Tuple[str, ...]
    scored_by: str = "fallback"

    @property
    def max_score(self) -> int:
        return sum(question.max_score for question in self.questions)

    def banner_for(self, total_score: int) -> FeedbackBanner:
        for banner in self.banners:
            if total_score >= banner.min_score:
                return banner
        return self.banners[-1]


SUMMARY_QUESTION = QuestionRubric(
    number=1,
    role="summary",
    label="問1",
    max_score=30,
    buckets=(
        LengthBucket(min_length=150, max_length=250, base_score=25, comment="適切な文字数で要約されています。"),
        LengthBucket(min_length=100, base_score=20, comment="やや短めですが、要点は押さえられています。"),
        LengthBucket(min_length=50, base_score=15, comment="短すぎます。もう少し詳しく要約してください。"),
        LengthBucket(min_length=0, base_score=10, comment="文字数が不足しています。"),
    ),
    criteria=(
        CriterionWeight(
            key="main_point_comprehension",
            name="要点把握",
            weight=0.40,
            max_score=12,
            comment="課題文の主要な論点を理解できています。",
            reasoning="文字数と内容から判定しました。",
        ),
        CriterionWeight(
            key="selection_and_organization",
            name="要点の整理・取捨選択",
            weight=0.35,
            max_score=10,
            comment="重要な論点を適切に選択できています。",
            reasoning="要約の構成から判定しました。",
        ),
        CriterionWeight(
            key="written_expression",
            name="文章表現",
            weight=0.25,
            max_score=8,
            comment="文章表現は概ね適切です。",
            reasoning="文字数と構成から判定しました。",
        ),
    ),
    ideal_range=(150, 250),
    reasoning_template="文字数: {length}字。要約問題では150-250字程度が適切です。",
    in_range_remark="適切な文字数で要約されています。",
    out_of_range_remark="要約問題では150-250字程度が適切です。",
    keyword_bonus=KeywordBonus(
        keywords=("匿名性", "SNS", "表現の自由", "誹謗中傷", "責任", "実名制"),
        points_per_keyword=1,
        cap=5,
    ),
)

OPINION_QUESTION = QuestionRubric(
    number=2,
    role="opinion",
    label="問2",
    max_score=70,
    buckets=(
        LengthBucket(min_length=600, max_length=800, base_score=60, comment="適切な文字数で論述されています。"),
        LengthBucket(min_length=400, base_score=50, comment="やや短めですが、論点は整理されています。"),
        LengthBucket(min_length=200, base_score=40, comment="短すぎます。もう少し詳しく論述してください。"),
        LengthBucket(min_length=100, base_score=30, comment="文字数が大幅に不足しています。"),
        LengthBucket(min_length=0, base_score=20, comment="文字数が大幅に不足しています。"),
    ),
    criteria=(
        CriterionWeight(
            key="source_comprehension",
            name="課題文の理解",
            weight=0.20,
            max_score=14,
            comment="課題文の内容を適切に理解しています。",
            reasoning="論述の内容から判定しました。",
        ),
        CriterionWeight(
            key="clear_position",
            name="自分自身の明確な意見・立場",
            weight=0.25,
            max_score=17,
            comment="自分の立場が明確に示されています。",
            reasoning="意見の明確性から判定しました。",
        ),
        CriterionWeight(
            key="logical_reasoning",
            name="論理的思考力",
            weight=0.30,
            max_score=21,
            comment="論理的な構成で論述されています。",
            reasoning="論理的構成から判定しました。",
        ),
        CriterionWeight(
            key="originality",
            name="独創性",
            weight=0.15,
            max_score=10,
            comment="独自の視点が含まれています。",
            reasoning="内容の独創性から判定しました。",
        ),
        CriterionWeight(
            key="relevance",
            name="適合性",
            weight=0.10,
            max_score=8,
            comment="課題に適合した内容です。",
            reasoning="課題への適合性から判定しました。",
        ),
    ),
    ideal_range=(600, 800),
    reasoning_template="文字数: {length}字。意見記述問題では600-800字程度が適切です。",
    in_range_remark="適切な文字数で論述されています。",
    out_of_range_remark="意見記述問題では600-800字程度が適切です。",
    marker_categories=(
        MarkerCategory(name="contrast", markers=("一方で", "しかし", "また")),
        MarkerCategory(name="example", markers=("例えば", "具体的に")),
        MarkerCategory(name="conclusion", markers=("結論", "以上", "このように")),
        MarkerCategory(name="opinion", markers=("私は", "私の考え", "思う")),
        MarkerCategory(name="justification", markers=("なぜなら", "理由", "根拠")),
    ),
)

CANONICAL_RUBRIC = ScoringRubric(
    questions=(SUMMARY_QUESTION, OPINION_QUESTION),
    banners=(
        FeedbackBanner(min_score=80, text="優秀な答案です。論理的構成と内容の両面で高い水準に達しています。"),
        FeedbackBanner(min_score=60, text="良好な答案です。基本的な論点は押さえられていますが、さらなる向上の余地があります。"),
        FeedbackBanner(min_score=40, text="標準的な答案です。基本的な理解は示されていますが、論述の深化が必要です。"),
        FeedbackBanner(min_score=0, text="改善が必要な答案です。課題文の理解と論述の構成を見直してください。"),
    ),
    improvement_points=(
        "論理的な構成を意識してください（序論・本論・結論）",
        "具体例を用いて論述を補強してください",
        "自分の意見を明確に示してください",
        "課題文の内容を踏まえた論述を心がけてください",
    ),
)


__all__ = [
    "CANONICAL_RUBRIC",
    "CriterionWeight",
    "FeedbackBanner",
    "KeywordBonus",
    "LengthBucket",
    "MarkerCategory",
    "OPINION_QUESTION",
    "QuestionRubric",
    "SUMMARY_QUESTION",
    "ScoringRubric",
]
