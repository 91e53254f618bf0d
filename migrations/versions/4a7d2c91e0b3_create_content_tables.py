"""create content tables

Revision ID: 4a7d2c91e0b3
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "4a7d2c91e0b3"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "exam_book",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("book_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("subtitle", sa.String(length=255), nullable=False),
        sa.Column("icon", sa.String(length=1024), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("total_category_hi", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_category_en", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("book_id"),
    )

    op.create_table(
        "quiz_sections",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("moduleCode", sa.String(length=100), nullable=False),
        sa.Column("moduleTitle", sa.String(length=255), nullable=False),
        sa.Column("sectionStatus", sa.SmallInteger(), nullable=False),
        sa.Column("liveTimestamp", sa.DateTime(), nullable=True),
        sa.Column("displayOrder", sa.Integer(), nullable=False),
        sa.Column("questionVolume", sa.Integer(), nullable=True),
        sa.Column("iconLink", sa.String(length=1024), nullable=True),
        sa.Column("bookRef", sa.String(length=64), nullable=False),
        sa.Column("languageCode", sa.String(length=8), nullable=False),
        sa.Column("setCount", sa.Integer(), nullable=True),
        sa.CheckConstraint('"sectionStatus" IN (0, 1)', name="ck_sections_status"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_sections_book_lang", "quiz_sections", ["bookRef", "languageCode"])
    op.create_index("idx_sections_module_code", "quiz_sections", ["moduleCode"])

    op.create_table(
        "quiz_categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("moduleCode", sa.String(length=100), nullable=False),
        sa.Column("moduleTitle", sa.String(length=255), nullable=False),
        sa.Column("segmentTitle", sa.String(length=255), nullable=False),
        sa.Column("segmentCode", sa.String(length=64), nullable=False),
        sa.Column("displayOrder", sa.Integer(), nullable=False),
        sa.Column("categoryStatus", sa.SmallInteger(), nullable=False),
        sa.Column("questionVolume", sa.Integer(), nullable=True),
        sa.Column("setCount", sa.Integer(), nullable=True),
        sa.Column("languageCode", sa.String(length=8), nullable=False),
        sa.Column("sectionRef", sa.String(length=100), nullable=True),
        sa.CheckConstraint('"categoryStatus" IN (0, 1)', name="ck_categories_status"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("segmentCode"),
    )
    op.create_index(
        "idx_categories_module_lang", "quiz_categories", ["moduleCode", "languageCode"]
    )

    op.create_table(
        "quizzes",
        sa.Column("internalQuizKey", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("quizTitle", sa.String(length=255), nullable=False),
        sa.Column("quizStatus", sa.SmallInteger(), nullable=False),
        sa.Column("languageCode", sa.String(length=8), nullable=False),
        sa.Column("coverImageLink", sa.String(length=1024), nullable=True),
        sa.Column("segmentCode", sa.String(length=64), nullable=False),
        sa.Column("segmentTitle", sa.String(length=255), nullable=True),
        sa.Column("questionVolume", sa.Integer(), nullable=True),
        sa.CheckConstraint('"quizStatus" IN (0, 1)', name="ck_quizzes_status"),
        sa.PrimaryKeyConstraint("internalQuizKey"),
    )
    op.create_index("idx_quizzes_segment_code", "quizzes", ["segmentCode"])

    op.create_table(
        "questions",
        sa.Column("questionId", sa.String(length=64), nullable=False),
        sa.Column("quizId", sa.String(length=64), nullable=False),
        sa.Column("questionType", sa.SmallInteger(), nullable=False),
        sa.Column("questionText", sa.Text(), nullable=False),
        sa.Column("correctAnswer", sa.String(length=1), nullable=False),
        sa.Column("optionA", sa.Text(), nullable=False),
        sa.Column("optionB", sa.Text(), nullable=False),
        sa.Column("optionC", sa.Text(), nullable=True),
        sa.Column("optionD", sa.Text(), nullable=True),
        sa.Column("noteText", sa.Text(), nullable=True),
        sa.Column("previouslyAskedIn", sa.String(length=255), nullable=True),
        sa.Column("languageCode", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint('"questionType" IN (1, 2)', name="ck_questions_type"),
        sa.CheckConstraint(
            "\"correctAnswer\" IN ('a','b','c','d')", name="ck_questions_answer"
        ),
        sa.PrimaryKeyConstraint("questionId"),
    )
    op.create_index("idx_questions_quiz_id", "questions", ["quizId"])

    op.create_table(
        "gk_subjects",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("language_code", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "gk_topics",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("subject_id", sa.String(length=36), nullable=False),
        sa.Column("language_code", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_gk_topics_subject_id", "gk_topics", ["subject_id"])

    op.create_table(
        "gk_oneliner_questions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("topic_id", sa.String(length=36), nullable=False),
        sa.Column("language_code", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_gk_oneliner_questions_topic_id", "gk_oneliner_questions", ["topic_id"]
    )

    op.create_table(
        "question_reports",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("questionId", sa.String(length=64), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=False),
        sa.Column("additional_message", sa.Text(), nullable=True),
        sa.Column("playerId", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_question_reports_questionId", "question_reports", ["questionId"])

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("picture", sa.String(length=1024), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "user_progress",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.String(length=64), nullable=False),
        sa.Column("quizKey", sa.String(length=64), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_progress_profile_id", "user_progress", ["profile_id"])

    op.create_table(
        "admin_users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )


def downgrade():
    op.drop_table("admin_users")
    op.drop_index("ix_user_progress_profile_id", table_name="user_progress")
    op.drop_table("user_progress")
    op.drop_table("profiles")
    op.drop_index("ix_question_reports_questionId", table_name="question_reports")
    op.drop_table("question_reports")
    op.drop_index("ix_gk_oneliner_questions_topic_id", table_name="gk_oneliner_questions")
    op.drop_table("gk_oneliner_questions")
    op.drop_index("ix_gk_topics_subject_id", table_name="gk_topics")
    op.drop_table("gk_topics")
    op.drop_table("gk_subjects")
    op.drop_index("idx_questions_quiz_id", table_name="questions")
    op.drop_table("questions")
    op.drop_index("idx_quizzes_segment_code", table_name="quizzes")
    op.drop_table("quizzes")
    op.drop_index("idx_categories_module_lang", table_name="quiz_categories")
    op.drop_table("quiz_categories")
    op.drop_index("idx_sections_module_code", table_name="quiz_sections")
    op.drop_index("idx_sections_book_lang", table_name="quiz_sections")
    op.drop_table("quiz_sections")
    op.drop_table("exam_book")
