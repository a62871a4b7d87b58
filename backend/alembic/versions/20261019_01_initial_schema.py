"""Initial essay grading schema."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20261019_01_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "essay_tests",
        sa.Column("id", sa.String(length=191), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("reading_time", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("writing_time", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("total_points", sa.Integer(), nullable=False, server_default="100"),
        sa.Column("difficulty", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("category", sa.String(length=128), nullable=False, server_default=""),
        sa.Column("participants", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("essay_text", sa.Text(), nullable=False, server_default=""),
        sa.Column("scoring_criteria", sa.JSON(), nullable=False),
    )

    op.create_table(
        "essay_questions",
        sa.Column("id", sa.String(length=191), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column("test_id", sa.String(length=191), sa.ForeignKey("essay_tests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("character_limit", sa.String(length=64), nullable=False, server_default=""),
        sa.UniqueConstraint("test_id", "number", name="uq_essay_question_number"),
    )
    op.create_index("ix_essay_questions_test_id", "essay_questions", ["test_id"])

    op.create_table(
        "submissions",
        sa.Column("id", sa.String(length=191), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column("test_id", sa.String(length=191), nullable=False),
        sa.Column("user_id", sa.String(length=191), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
    )
    op.create_index("ix_submissions_test_id", "submissions", ["test_id"])
    op.create_index("ix_submissions_user_id", "submissions", ["user_id"])
    op.create_index("ix_submissions_status", "submissions", ["status"])

    op.create_table(
        "submission_answers",
        sa.Column("id", sa.String(length=191), primary_key=True, nullable=False),
        sa.Column("submission_id", sa.String(length=191), sa.ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("question_id", sa.String(length=191), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("word_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_submission_answers_submission_id", "submission_answers", ["submission_id"])
    op.create_index("ix_submission_answers_question_id", "submission_answers", ["question_id"])

    op.create_table(
        "scoring_results",
        sa.Column("id", sa.String(length=191), primary_key=True, nullable=False),
        sa.Column("submission_id", sa.String(length=191), nullable=False),
        sa.Column("test_id", sa.String(length=191), nullable=False),
        sa.Column("test_title", sa.Text(), nullable=False, server_default=""),
        sa.Column("total_score", sa.Integer(), nullable=False),
        sa.Column("max_score", sa.Integer(), nullable=False),
        sa.Column("percentage", sa.Float(), nullable=False),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("feedback", sa.Text(), nullable=False, server_default=""),
        sa.Column("scored_by", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_scoring_results_submission", "scoring_results", ["submission_id"])
    op.create_index("ix_scoring_results_expires", "scoring_results", ["expires_at"])
    op.create_index("ix_scoring_results_test_id", "scoring_results", ["test_id"])


def downgrade() -> None:
    op.drop_index("ix_scoring_results_test_id", table_name="scoring_results")
    op.drop_index("ix_scoring_results_expires", table_name="scoring_results")
    op.drop_index("ix_scoring_results_submission", table_name="scoring_results")
    op.drop_table("scoring_results")
    op.drop_index("ix_submission_answers_question_id", table_name="submission_answers")
    op.drop_index("ix_submission_answers_submission_id", table_name="submission_answers")
    op.drop_table("submission_answers")
    op.drop_index("ix_submissions_status", table_name="submissions")
    op.drop_index("ix_submissions_user_id", table_name="submissions")
    op.drop_index("ix_submissions_test_id", table_name="submissions")
    op.drop_table("submissions")
    op.drop_index("ix_essay_questions_test_id", table_name="essay_questions")
    op.drop_table("essay_questions")
    op.drop_table("essay_tests")
