"""Child-count guards for deletes and upkeep of the denormalized counters.

Parent rows carry counters of their children (a book's categories per
language, a category's quizzes and questions, ...). Deletes are refused
while any counter is non-zero, and the service layer keeps the counters in
step with every child insert, delete and move.
"""

from typing import Any, Dict, Optional

from extensions import db
from models import ExamBook, Quiz, QuizCategory, QuizSection

CATEGORY_LANGUAGES = ("hi", "en")


class DeletionBlocked(Exception):
    """Raised when a parent still has children and must not be deleted."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "blocked": True,
            "error": self.message,
            "details": self.details,
        }


# ============================================================================
# GUARDS
# ============================================================================


def ensure_book_deletable(book: ExamBook) -> None:
    hi = book.total_category_hi or 0
    en = book.total_category_en or 0
    if hi > 0 or en > 0:
        raise DeletionBlocked(
            f"Cannot delete book '{book.title}': it still has categories. "
            "Please delete all categories first.",
            {"hi": hi, "en": en, "title": book.title},
        )


def ensure_section_deletable(section: QuizSection) -> None:
    set_count = section.set_count or 0
    question_volume = section.question_volume or 0
    categories = categories_of_section(section).count()
    if set_count > 0 or question_volume > 0 or categories > 0:
        raise DeletionBlocked(
            f"Cannot delete section '{section.module_title}': it still has "
            "categories or quiz sets. Please delete them first.",
            {
                "set_count": set_count,
                "question_volume": question_volume,
                "categories": categories,
                "title": section.module_title,
            },
        )


def ensure_category_deletable(category: QuizCategory) -> None:
    set_count = category.set_count or 0
    question_volume = category.question_volume or 0
    if set_count > 0 or question_volume > 0:
        raise DeletionBlocked(
            f"Cannot delete category '{category.segment_title}': it still has "
            "sets or questions. Please delete them first.",
            {
                "set_count": set_count,
                "question_volume": question_volume,
                "title": category.segment_title,
            },
        )


def ensure_quiz_deletable(quiz: Quiz) -> None:
    question_volume = quiz.question_volume or 0
    if question_volume > 0:
        raise DeletionBlocked(
            "Please delete all questions first before deleting this quiz.",
            {"question_volume": question_volume, "title": quiz.quiz_title},
        )


def ensure_no_children(count: int, label: str, title: str, child_label: str) -> None:
    """Guard for parents without a stored counter; ``count`` is queried live."""
    if count > 0:
        raise DeletionBlocked(
            f"Cannot delete {label} '{title}': it still has {count} "
            f"{child_label}. Please delete them first.",
            {"count": count, "title": title},
        )


# ============================================================================
# COUNTER UPKEEP
# ============================================================================


def _bump(row, attr: str, delta: int) -> None:
    if row is None:
        return
    current = getattr(row, attr) or 0
    setattr(row, attr, max(0, current + delta))


def section_for_module(module_code: str, language_code: Optional[str] = None):
    """Return the section a category hangs under, preferring the same language."""
    query = QuizSection.query.filter_by(module_code=module_code)
    if language_code:
        match = query.filter_by(language_code=language_code).first()
        if match:
            return match
    return query.order_by(QuizSection.id.asc()).first()


def section_of(category: QuizCategory) -> Optional[QuizSection]:
    """The section ``category`` is filed under: its ``section_ref`` when set."""
    if category.section_ref and category.section_ref.isdigit():
        section = db.session.get(QuizSection, int(category.section_ref))
        if section is not None:
            return section
    return section_for_module(category.module_code, category.language_code)


def categories_of_section(section: QuizSection):
    """Query for the categories filed under ``section``."""
    return QuizCategory.query.filter(
        db.or_(
            QuizCategory.section_ref == str(section.id),
            db.and_(
                QuizCategory.section_ref.is_(None),
                QuizCategory.module_code == section.module_code,
                QuizCategory.language_code == section.language_code,
            ),
        )
    )


def category_for_segment(segment_code: str) -> Optional[QuizCategory]:
    return QuizCategory.query.filter_by(segment_code=segment_code).first()


def adjust_book_category_count(category: QuizCategory, delta: int) -> None:
    if category.language_code not in CATEGORY_LANGUAGES:
        return
    section = section_of(category)
    if section is None:
        return
    book = ExamBook.query.filter_by(book_id=section.book_ref).first()
    _bump(book, f"total_category_{category.language_code}", delta)


def shift_category(category: QuizCategory, sign: int) -> None:
    """Add (``sign=1``) or remove (``sign=-1``) a category's counts on its parents."""
    adjust_book_category_count(category, sign)
    section = section_of(category)
    _bump(section, "set_count", sign * (category.set_count or 0))
    _bump(section, "question_volume", sign * (category.question_volume or 0))


def _adjust_segment(segment_code: str, sets: int, questions: int) -> None:
    category = category_for_segment(segment_code)
    if category is None:
        return
    section = section_of(category)
    for row in (category, section):
        _bump(row, "set_count", sets)
        _bump(row, "question_volume", questions)


def adjust_set_count(segment_code: str, delta: int) -> None:
    _adjust_segment(segment_code, delta, 0)


def adjust_question_volume(quiz: Optional[Quiz], delta: int) -> None:
    if quiz is None:
        return
    _bump(quiz, "question_volume", delta)
    _adjust_segment(quiz.segment_code, 0, delta)


def move_quiz_counts(quiz: Quiz, old_segment: str, new_segment: str) -> None:
    """Carry a quiz's set and question counts from one category to another."""
    if old_segment == new_segment:
        return
    questions = quiz.question_volume or 0
    _adjust_segment(old_segment, -1, -questions)
    _adjust_segment(new_segment, 1, questions)
