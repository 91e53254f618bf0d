"""Database models for the quiz content tables, user profiles and admin accounts.

Column names keep the camelCase spelling used by the hosted tables; the
Python attributes are snake_case.
"""

from datetime import datetime
import uuid

from extensions import db


def _uuid() -> str:
    return str(uuid.uuid4())


def _iso(value):
    return value.isoformat() if value else None


class ExamBook(db.Model):
    """Top-level exam book grouping quiz sections."""

    __tablename__ = "exam_book"

    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.String(64), nullable=False, unique=True, default=_uuid)
    title = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.String(255), nullable=False)
    icon = db.Column(db.String(1024), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)
    total_category_hi = db.Column(db.Integer, nullable=False, default=0)
    total_category_en = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {
            "id": self.id,
            "book_id": self.book_id,
            "title": self.title,
            "subtitle": self.subtitle,
            "icon": self.icon,
            "order": self.order,
            "total_category_hi": self.total_category_hi,
            "total_category_en": self.total_category_en,
        }

    def __repr__(self) -> str:
        return f"<ExamBook {self.book_id} {self.title!r}>"


class QuizSection(db.Model):
    """Section (module) of a book in one language."""

    __tablename__ = "quiz_sections"

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    module_code = db.Column("moduleCode", db.String(100), nullable=False)
    module_title = db.Column("moduleTitle", db.String(255), nullable=False)
    section_status = db.Column("sectionStatus", db.SmallInteger, nullable=False, default=1)
    live_timestamp = db.Column("liveTimestamp", db.DateTime, nullable=True)
    display_order = db.Column("displayOrder", db.Integer, nullable=False, default=0)
    question_volume = db.Column("questionVolume", db.Integer, nullable=True, default=0)
    icon_link = db.Column("iconLink", db.String(1024), nullable=True)
    book_ref = db.Column("bookRef", db.String(64), nullable=False)
    language_code = db.Column("languageCode", db.String(8), nullable=False)
    set_count = db.Column("setCount", db.Integer, nullable=True, default=0)

    __table_args__ = (
        db.CheckConstraint('"sectionStatus" IN (0, 1)', name="ck_sections_status"),
        db.Index("idx_sections_book_lang", "bookRef", "languageCode"),
        db.Index("idx_sections_module_code", "moduleCode"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "created_at": _iso(self.created_at),
            "module_code": self.module_code,
            "module_title": self.module_title,
            "section_status": self.section_status,
            "live_timestamp": _iso(self.live_timestamp),
            "display_order": self.display_order,
            "question_volume": self.question_volume,
            "icon_link": self.icon_link,
            "book_ref": self.book_ref,
            "language_code": self.language_code,
            "set_count": self.set_count,
        }

    def __repr__(self) -> str:
        return f"<QuizSection {self.module_code} ({self.language_code})>"


class QuizCategory(db.Model):
    """Category (segment) inside a section."""

    __tablename__ = "quiz_categories"

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    module_code = db.Column("moduleCode", db.String(100), nullable=False)
    module_title = db.Column("moduleTitle", db.String(255), nullable=False)
    segment_title = db.Column("segmentTitle", db.String(255), nullable=False)
    segment_code = db.Column("segmentCode", db.String(64), nullable=False, unique=True, default=_uuid)
    display_order = db.Column("displayOrder", db.Integer, nullable=False, default=0)
    category_status = db.Column("categoryStatus", db.SmallInteger, nullable=False, default=1)
    question_volume = db.Column("questionVolume", db.Integer, nullable=True, default=0)
    set_count = db.Column("setCount", db.Integer, nullable=True, default=0)
    language_code = db.Column("languageCode", db.String(8), nullable=False)
    section_ref = db.Column("sectionRef", db.String(100), nullable=True)

    __table_args__ = (
        db.CheckConstraint('"categoryStatus" IN (0, 1)', name="ck_categories_status"),
        db.Index("idx_categories_module_lang", "moduleCode", "languageCode"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "created_at": _iso(self.created_at),
            "module_code": self.module_code,
            "module_title": self.module_title,
            "segment_title": self.segment_title,
            "segment_code": self.segment_code,
            "display_order": self.display_order,
            "category_status": self.category_status,
            "question_volume": self.question_volume,
            "set_count": self.set_count,
            "language_code": self.language_code,
            "section_ref": self.section_ref,
        }

    def __repr__(self) -> str:
        return f"<QuizCategory {self.segment_code} {self.segment_title!r}>"


class Quiz(db.Model):
    """Quiz (set) inside a category."""

    __tablename__ = "quizzes"

    internal_quiz_key = db.Column("internalQuizKey", db.String(64), primary_key=True, default=_uuid)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    quiz_title = db.Column("quizTitle", db.String(255), nullable=False)
    quiz_status = db.Column("quizStatus", db.SmallInteger, nullable=False, default=1)
    language_code = db.Column("languageCode", db.String(8), nullable=False)
    cover_image_link = db.Column("coverImageLink", db.String(1024), nullable=True)
    segment_code = db.Column("segmentCode", db.String(64), nullable=False)
    segment_title = db.Column("segmentTitle", db.String(255), nullable=True)
    question_volume = db.Column("questionVolume", db.Integer, nullable=True, default=0)

    __table_args__ = (
        db.CheckConstraint('"quizStatus" IN (0, 1)', name="ck_quizzes_status"),
        db.Index("idx_quizzes_segment_code", "segmentCode"),
    )

    def to_dict(self):
        return {
            "internal_quiz_key": self.internal_quiz_key,
            "created_at": _iso(self.created_at),
            "quiz_title": self.quiz_title,
            "quiz_status": self.quiz_status,
            "language_code": self.language_code,
            "cover_image_link": self.cover_image_link,
            "segment_code": self.segment_code,
            "segment_title": self.segment_title,
            "question_volume": self.question_volume,
        }

    def __repr__(self) -> str:
        return f"<Quiz {self.internal_quiz_key} {self.quiz_title!r}>"


class Question(db.Model):
    """Multiple-choice or true/false question of a quiz."""

    __tablename__ = "questions"

    question_id = db.Column("questionId", db.String(64), primary_key=True)
    quiz_id = db.Column("quizId", db.String(64), nullable=False)
    question_type = db.Column("questionType", db.SmallInteger, nullable=False, default=1)
    question_text = db.Column("questionText", db.Text, nullable=False)
    correct_answer = db.Column("correctAnswer", db.String(1), nullable=False)
    option_a = db.Column("optionA", db.Text, nullable=False)
    option_b = db.Column("optionB", db.Text, nullable=False)
    option_c = db.Column("optionC", db.Text, nullable=True)
    option_d = db.Column("optionD", db.Text, nullable=True)
    note_text = db.Column("noteText", db.Text, nullable=True)
    previously_asked_in = db.Column("previouslyAskedIn", db.String(255), nullable=True)
    language_code = db.Column("languageCode", db.String(8), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint('"questionType" IN (1, 2)', name="ck_questions_type"),
        db.CheckConstraint(
            "\"correctAnswer\" IN ('a','b','c','d')", name="ck_questions_answer"
        ),
        db.Index("idx_questions_quiz_id", "quizId"),
    )

    def to_dict(self):
        return {
            "question_id": self.question_id,
            "quiz_id": self.quiz_id,
            "question_type": self.question_type,
            "question_text": self.question_text,
            "correct_answer": self.correct_answer,
            "option_a": self.option_a,
            "option_b": self.option_b,
            "option_c": self.option_c,
            "option_d": self.option_d,
            "note_text": self.note_text,
            "previously_asked_in": self.previously_asked_in,
            "language_code": self.language_code,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Question {self.question_id} quiz={self.quiz_id}>"


class GKSubject(db.Model):
    """General-knowledge subject."""

    __tablename__ = "gk_subjects"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    title = db.Column(db.String(255), nullable=False)
    language_code = db.Column(db.String(8), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "language_code": self.language_code,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<GKSubject {self.title!r} ({self.language_code})>"


class GKTopic(db.Model):
    """Topic inside a GK subject."""

    __tablename__ = "gk_topics"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    title = db.Column(db.String(255), nullable=False)
    subject_id = db.Column(db.String(36), nullable=False, index=True)
    language_code = db.Column(db.String(8), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "subject_id": self.subject_id,
            "language_code": self.language_code,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<GKTopic {self.title!r} subject={self.subject_id}>"


class GKOneLinerQuestion(db.Model):
    """Single-line GK question stored as markdown."""

    __tablename__ = "gk_oneliner_questions"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    question = db.Column(db.Text, nullable=False)
    topic_id = db.Column(db.String(36), nullable=False, index=True)
    language_code = db.Column(db.String(8), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "question": self.question,
            "topic_id": self.topic_id,
            "language_code": self.language_code,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<GKOneLinerQuestion {self.id} topic={self.topic_id}>"


class QuestionReport(db.Model):
    """Player report raised against a question."""

    __tablename__ = "question_reports"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column("questionId", db.String(64), nullable=False, index=True)
    reason = db.Column(db.String(255), nullable=False)
    additional_message = db.Column(db.Text, nullable=True)
    player_id = db.Column("playerId", db.String(64), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending")
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "question_id": self.question_id,
            "reason": self.reason,
            "additional_message": self.additional_message,
            "player_id": self.player_id,
            "status": self.status,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<QuestionReport {self.question_id} ({self.status})>"


class UserProfile(db.Model):
    """Player profile mirrored from the auth provider."""

    __tablename__ = "profiles"

    id = db.Column(db.String(64), primary_key=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    email = db.Column(db.String(255), nullable=True)
    name = db.Column(db.String(255), nullable=True)
    picture = db.Column(db.String(1024), nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "updated_at": _iso(self.updated_at),
            "email": self.email,
            "name": self.name,
            "picture": self.picture,
        }

    def __repr__(self) -> str:
        return f"<UserProfile {self.id} {self.email}>"


class UserProgress(db.Model):
    """Leaderboard row: one quiz result of a player."""

    __tablename__ = "user_progress"

    id = db.Column(db.Integer, primary_key=True)
    profile_id = db.Column(db.String(64), nullable=False, index=True)
    quiz_key = db.Column("quizKey", db.String(64), nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<UserProgress {self.profile_id} {self.quiz_key}>"


class AdminUser(db.Model):
    """Dashboard login account."""

    __tablename__ = "admin_users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<AdminUser {self.email} admin={self.is_admin}>"
