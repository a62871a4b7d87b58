"""Seed data for the canonical two-question essay test."""

from __future__ import annotations

import logging

from .essay_test import EssayTest, Question, ScoringCriteria
from .repositories import EssayTestRepository, EssayTestStore


logger = logging.getLogger(__name__)

CANONICAL_TEST_ID = "sns-anonymity"

_ESSAY_TEXT = (
    "インターネット上のSNSでは、多くの利用者が匿名で発言している。匿名性は、社会的な立場や人間関係に"
    "縛られずに意見を表明できるという点で、表現の自由を支える重要な仕組みである。内部告発や少数意見の"
    "発信が可能になるのも、匿名で発言できる環境があるからだ。\n\n"
    "しかし一方で、匿名性は発言者の責任を曖昧にする。顔の見えない相手に対しては攻撃的な言葉を"
    "投げかけやすくなり、誹謗中傷が拡散して深刻な被害を生む事例が後を絶たない。被害者が加害者を"
    "特定するには時間と費用がかかり、救済は容易ではない。\n\n"
    "こうした状況を受けて、SNSに実名制を導入すべきだという議論がある。実名制は発言への責任感を高める"
    "一方で、自由な発言を萎縮させるおそれもある。匿名性の利点を保ちながら、いかにして発言の責任を"
    "確保するか。私たちは、表現の自由と他者の権利の保護をどのように両立させるべきかを問われている。"
)

CANONICAL_TEST = EssayTest(
    id=CANONICAL_TEST_ID,
    title="SNSの匿名性と表現の自由",
    description="SNSにおける匿名性の是非について、課題文を要約し自分の意見を論述する小論文テストです。",
    reading_time="10分",
    writing_time="60分",
    total_points=100,
    difficulty="標準",
    category="社会・情報",
    participants=0,
    essay_text=_ESSAY_TEXT,
    questions=[
        Question(
            id=f"{CANONICAL_TEST_ID}-q1",
            number=1,
            title="課題文の要約",
            description="課題文の主張を200字程度で要約しなさい。",
            points=30,
            character_limit="150-250字",
        ),
        Question(
            id=f"{CANONICAL_TEST_ID}-q2",
            number=2,
            title="意見論述",
            description="SNSに実名制を導入すべきかについて、あなたの考えを700字程度で論じなさい。",
            points=70,
            character_limit="600-800字",
        ),
    ],
    scoring_criteria=ScoringCriteria(
        main_thesis="SNSの匿名性は表現の自由を支える一方、発言の責任を曖昧にし誹謗中傷を生む。",
        key_points=[
            "匿名性は表現の自由や少数意見の発信を支える",
            "匿名性は発言者の責任を曖昧にし、誹謗中傷の温床となる",
            "実名制は責任感を高めるが、発言を萎縮させるおそれがある",
        ],
        question2_topic="SNSへの実名制導入の是非",
    ),
)


def seed_essay_tests(repository: EssayTestStore | None = None) -> int:
    """Insert the canonical test if it is missing. Returns the number of tests written."""
    repository = repository or EssayTestRepository()
    if repository.get_by_id(CANONICAL_TEST.id) is not None:
        logger.info("Essay test %s already present; skipping seed", CANONICAL_TEST.id)
        return 0
    repository.save(CANONICAL_TEST)
    logger.info("Seeded essay test %s", CANONICAL_TEST.id)
    return 1


__all__ = ["CANONICAL_TEST", "CANONICAL_TEST_ID", "seed_essay_tests"]
