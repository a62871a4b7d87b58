"""Tests for the heuristic scoring engine and its rubric tables."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from essay_grader.errors import ScoringError
from essay_grader.scoring_engine import (
    HeuristicScoringEngine,
    assess_answer,
    content_bonus,
    criteria_scores,
    score_question,
)
from essay_grader.scoring_rules import CANONICAL_RUBRIC, OPINION_QUESTION, SUMMARY_QUESTION, LengthBucket
from essay_grader.seed import CANONICAL_TEST
from essay_grader.submission import Answer, Submission


FIXED_NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


def _submission(*contents: str) -> Submission:
    submission = Submission(test_id=CANONICAL_TEST.id)
    submission.answers = [
        Answer(submission_id=submission.id, question_id=question.id, content=content, word_count=len(content))
        for question, content in zip(CANONICAL_TEST.questions, contents)
    ]
    return submission


@pytest.mark.parametrize(
    ("length", "expected"),
    [(0, 10), (49, 10), (50, 15), (99, 15), (100, 20), (149, 20), (150, 25), (250, 25), (251, 20)],
)
def test_summary_length_buckets(length: int, expected: int) -> None:
    assert assess_answer("あ" * length, SUMMARY_QUESTION).base_score == expected


@pytest.mark.parametrize(
    ("length", "expected"),
    [(0, 20), (99, 20), (100, 30), (199, 30), (200, 40), (399, 40), (400, 50), (599, 50), (600, 60), (800, 60), (801, 50)],
)
def test_opinion_length_buckets(length: int, expected: int) -> None:
    assert assess_answer("あ" * length, OPINION_QUESTION).base_score == expected


def test_summary_base_score_never_drops_up_to_upper_bound() -> None:
    scores = [assess_answer("あ" * length, SUMMARY_QUESTION).base_score for length in range(0, 251)]
    assert scores == sorted(scores)


def test_keyword_bonus_counts_each_keyword_once_and_caps_at_five() -> None:
    assert content_bonus("SNSSNSSNS", SUMMARY_QUESTION) == 1
    assert content_bonus("匿名性とSNS", SUMMARY_QUESTION) == 2
    every_keyword = "匿名性SNS表現の自由誹謗中傷責任実名制"
    assert content_bonus(every_keyword, SUMMARY_QUESTION) == 5


def test_keyword_match_is_case_sensitive() -> None:
    assert content_bonus("sns", SUMMARY_QUESTION) == 0


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("", 0),
        ("しかし", 2),
        ("しかし一方でまた", 2),
        ("私は思う。例えば、なぜなら", 6),
        ("しかし例えば結論私はなぜなら", 10),
    ],
)
def test_opinion_marker_categories_are_binary(content: str, expected: int) -> None:
    assert content_bonus(content, OPINION_QUESTION) == expected


def test_score_is_capped_at_question_maximum() -> None:
    summary = "匿名性SNS表現の自由誹謗中傷責任実名制" + "あ" * 180
    assessment = assess_answer(summary, SUMMARY_QUESTION)
    assert assessment.base_score == 25
    assert assessment.score == 30

    opinion = "しかし例えば結論私はなぜなら" + "あ" * 686
    assert assess_answer(opinion, OPINION_QUESTION).score == 70


def test_comment_follows_length_bucket_not_bonus() -> None:
    assessment = assess_answer("匿名性SNS", SUMMARY_QUESTION)
    assert assessment.bonus == 2
    assert assessment.comment == "文字数が不足しています。"
    assert assessment.reasoning == "文字数: 6字。要約問題では150-250字程度が適切です。"


def test_criteria_scores_round_half_up() -> None:
    scores = [item.score for item in criteria_scores(10, SUMMARY_QUESTION)]
    # 4.0, 3.5, 2.5
    assert scores == [4, 4, 3]


def test_criteria_scores_follow_weight_table() -> None:
    summary = criteria_scores(25, SUMMARY_QUESTION)
    assert [item.criteria_name for item in summary] == ["要点把握", "要点の整理・取捨選択", "文章表現"]
    assert [item.score for item in summary] == [10, 9, 6]
    assert [item.max_score for item in summary] == [12, 10, 8]

    opinion = criteria_scores(60, OPINION_QUESTION)
    assert [item.score for item in opinion] == [12, 15, 18, 9, 6]
    assert [item.max_score for item in opinion] == [14, 17, 21, 10, 8]


@pytest.mark.parametrize("question", [SUMMARY_QUESTION, OPINION_QUESTION])
def test_criteria_sum_stays_within_rounding_slack(question) -> None:
    for score in range(0, question.max_score + 1):
        breakdown = criteria_scores(score, question)
        assert abs(sum(item.score for item in breakdown) - score) <= len(breakdown)


def test_criteria_weights_sum_to_one() -> None:
    for question in CANONICAL_RUBRIC.questions:
        assert sum(criterion.weight for criterion in question.criteria) == pytest.approx(1.0)


def test_score_question_reports_unrounded_percentage() -> None:
    detail = score_question("あ" * 200, SUMMARY_QUESTION)
    assert detail.question_num == 1
    assert detail.score == 25
    assert detail.max_score == 30
    assert detail.percentage == pytest.approx(25 / 30 * 100)


def test_engine_scores_typical_submission() -> None:
    engine = HeuristicScoringEngine(clock=lambda: FIXED_NOW, id_factory=lambda: "result-1")
    submission = _submission("あ" * 200, "い" * 700)

    result = engine.score_submission(submission, CANONICAL_TEST)

    assert result.id == "result-1"
    assert result.submission_id == submission.id
    assert result.test_id == CANONICAL_TEST.id
    assert result.test_title == CANONICAL_TEST.title
    assert [detail.score for detail in result.details] == [25, 60]
    assert result.total_score == 85
    assert result.max_score == 100
    assert result.percentage == pytest.approx(85.0)
    assert result.scored_by == "fallback"
    assert result.created_at == FIXED_NOW
    assert result.expires_at == FIXED_NOW + timedelta(days=30)
    assert result.feedback.startswith("【総合評価】\n優秀な答案です。")


def test_engine_scores_empty_submission() -> None:
    engine = HeuristicScoringEngine(clock=lambda: FIXED_NOW)
    result = engine.score_submission(_submission("", ""), CANONICAL_TEST)

    assert [detail.score for detail in result.details] == [10, 20]
    assert result.total_score == 30
    assert result.percentage == pytest.approx(30.0)
    assert "改善が必要な答案です。" in result.feedback


def test_engine_is_deterministic_apart_from_ids() -> None:
    engine = HeuristicScoringEngine(clock=lambda: FIXED_NOW)
    submission = _submission("SNSの匿名性について" * 10, "私は実名制に反対だ。なぜなら" * 30)

    first = engine.score_submission(submission, CANONICAL_TEST)
    second = engine.score_submission(submission, CANONICAL_TEST)

    assert first.id != second.id
    assert first.model_dump(exclude={"id"}) == second.model_dump(exclude={"id"})


def test_engine_honours_configured_ttl() -> None:
    engine = HeuristicScoringEngine(result_ttl=timedelta(days=7), clock=lambda: FIXED_NOW)
    result = engine.score_submission(_submission("", ""), CANONICAL_TEST)
    assert result.expires_at == FIXED_NOW + timedelta(days=7)


def test_engine_rejects_wrong_answer_count() -> None:
    engine = HeuristicScoringEngine()
    submission = _submission("only one answer")

    with pytest.raises(ScoringError) as excinfo:
        engine.score_submission(submission, CANONICAL_TEST)

    assert excinfo.value.submission_id == submission.id


def test_score_answers_requires_one_answer_per_question() -> None:
    engine = HeuristicScoringEngine()
    with pytest.raises(ScoringError):
        engine.score_answers(["a", "b", "c"])


def test_uncovered_length_raises_scoring_error() -> None:
    gappy = replace(SUMMARY_QUESTION, buckets=(LengthBucket(min_length=50, base_score=15, comment="短すぎます。"),))
    with pytest.raises(ScoringError):
        assess_answer("", gappy)
