"""Narrative feedback for heuristic scoring results."""

from __future__ import annotations

from typing import List, Sequence

from .scoring_rules import CANONICAL_RUBRIC, ScoringRubric


def compose_feedback(
    total_score: int,
    answer_lengths: Sequence[int],
    rubric: ScoringRubric = CANONICAL_RUBRIC,
) -> str:
    """Build the overall banner, one section per question, then the improvement footer.

    ``answer_lengths`` is positional: the first entry belongs to question 1.
    """
    if len(answer_lengths) != len(rubric.questions):
        raise ValueError(
            f"Expected {len(rubric.questions)} answer lengths, got {len(answer_lengths)}."
        )

    lines: List[str] = ["【総合評価】", rubric.banner_for(total_score).text, ""]

    for question, length in zip(rubric.questions, answer_lengths):
        lines.append(f"【{question.label}について】")
        lines.append(f"文字数: {length}字")
        if question.in_ideal_range(length):
            lines.append(question.in_range_remark)
        else:
            lines.append(question.out_of_range_remark)
        lines.append("")

    lines.append("【改善のポイント】")
    lines.extend(f"・{point}" for point in rubric.improvement_points)
    return "\n".join(lines) + "\n"


__all__ = ["compose_feedback"]
