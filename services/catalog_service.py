"""Catalog Service Module

Exam books, quiz sections, quiz categories and quizzes: the parent levels
of the question hierarchy. Every delete here is guarded by the child
counters kept in :mod:`services.guards`.
"""

import uuid
from typing import Any, Dict, Optional

from extensions import db
from forms import QuizCategoryForm, QuizForm, QuizSectionForm, ExamBookForm
from models import ExamBook, Quiz, QuizCategory, QuizSection
from services import guards
from services.base_service import BaseService
from utils.pagination import BOOKS_PER_PAGE, paginate


class CatalogService(BaseService):
    """Service class for the book → section → category → quiz levels."""

    DEFAULT_SECTION_LANGUAGE = "hi"
    DEFAULT_CATEGORY_LANGUAGE = "en"

    # ============================================================================
    # EXAM BOOKS
    # ============================================================================

    def list_books(self, page: int = 1, per_page: int = BOOKS_PER_PAGE) -> Dict[str, Any]:
        stmt = db.select(ExamBook).order_by(ExamBook.order.asc(), ExamBook.id.asc())
        books, meta = paginate(stmt, page, per_page)
        return {"success": True, "books": books, "pagination": meta}

    def get_book(self, book_pk: int) -> Optional[ExamBook]:
        return db.session.get(ExamBook, book_pk)

    def create_book(self, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        form, failure = self._validate(ExamBookForm, payload)
        if failure:
            return failure

        book = ExamBook(book_id=str(uuid.uuid4()))
        self._apply(book, form.model_dump())
        db.session.add(book)
        failure = self._commit("add book")
        if failure:
            return failure
        return {"success": True, "message": "Book added", "book": book}

    def update_book(self, book_pk: int, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        book = self.get_book(book_pk)
        if book is None:
            return self._not_found("Book")
        form, failure = self._validate(ExamBookForm, payload)
        if failure:
            return failure

        # Counters are left alone unless the dialog sent them.
        counters = {"total_category_hi", "total_category_en"} - form.model_fields_set
        self._apply(book, form.model_dump(), exclude=counters)
        failure = self._commit("update book")
        if failure:
            return failure
        return {"success": True, "message": "Book updated", "book": book}

    def delete_book(self, book_pk: int) -> Dict[str, Any]:
        book = self._locked(ExamBook, id=book_pk)
        if book is None:
            return self._not_found("Book")
        return self._guarded_delete(book, "Book", guard=guards.ensure_book_deletable)

    # ============================================================================
    # QUIZ SECTIONS
    # ============================================================================

    def list_sections(self, book_id: str, language_code: Optional[str] = None) -> Dict[str, Any]:
        language_code = language_code or self.DEFAULT_SECTION_LANGUAGE
        sections = (
            QuizSection.query.filter_by(book_ref=book_id, language_code=language_code)
            .order_by(QuizSection.display_order.asc(), QuizSection.id.asc())
            .all()
        )
        return {
            "success": True,
            "book": ExamBook.query.filter_by(book_id=book_id).first(),
            "language_code": language_code,
            "sections": sections,
        }

    def create_section(
        self,
        book_id: str,
        payload: Optional[Dict[str, Any]],
        language_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        values = dict(payload or {})
        values.setdefault("book_ref", book_id)
        values.setdefault("language_code", language_code or self.DEFAULT_SECTION_LANGUAGE)
        form, failure = self._validate(QuizSectionForm, values)
        if failure:
            return failure

        section = QuizSection(set_count=0, question_volume=0)
        self._apply(section, form.model_dump())
        db.session.add(section)
        failure = self._commit("add section")
        if failure:
            return failure
        return {"success": True, "message": "Section added", "section": section}

    def update_section(self, section_id: int, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        section = db.session.get(QuizSection, section_id)
        if section is None:
            return self._not_found("Section")
        values = dict(payload or {})
        values.setdefault("book_ref", section.book_ref)
        values.setdefault("language_code", section.language_code)
        form, failure = self._validate(QuizSectionForm, values)
        if failure:
            return failure

        moved = (form.book_ref, form.language_code) != (section.book_ref, section.language_code)
        categories = guards.categories_of_section(section).all() if moved else []
        for category in categories:
            guards.adjust_book_category_count(category, -1)
            # Pin the category so the section can still be found after the move.
            category.section_ref = str(section.id)
        self._apply(section, form.model_dump())
        for category in categories:
            guards.adjust_book_category_count(category, 1)
        failure = self._commit("update section")
        if failure:
            return failure
        return {"success": True, "message": "Section updated", "section": section}

    def delete_section(self, section_id: int) -> Dict[str, Any]:
        section = self._locked(QuizSection, id=section_id)
        if section is None:
            return self._not_found("Section")
        return self._guarded_delete(
            section, "Section", guard=guards.ensure_section_deletable
        )

    # ============================================================================
    # QUIZ CATEGORIES
    # ============================================================================

    def section_options(self, module_code: str):
        """Sections a category may be filed under, for the dialog selector."""
        return (
            QuizSection.query.filter_by(module_code=module_code)
            .order_by(QuizSection.module_title.asc())
            .all()
        )

    def list_categories(self, module_code: str, language_code: Optional[str] = None) -> Dict[str, Any]:
        language_code = language_code or self.DEFAULT_CATEGORY_LANGUAGE
        categories = (
            QuizCategory.query.filter_by(module_code=module_code, language_code=language_code)
            .order_by(QuizCategory.display_order.asc(), QuizCategory.id.asc())
            .all()
        )
        sections = self.section_options(module_code)
        module_title = sections[0].module_title if sections else module_code
        return {
            "success": True,
            "module_code": module_code,
            "module_title": module_title,
            "language_code": language_code,
            "categories": categories,
            "sections": sections,
        }

    def create_category(
        self,
        module_code: str,
        payload: Optional[Dict[str, Any]],
        language_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        values = dict(payload or {})
        values.setdefault("module_code", module_code)
        values.setdefault("language_code", language_code or self.DEFAULT_CATEGORY_LANGUAGE)

        section = guards.section_for_module(values["module_code"], values["language_code"])
        if section is not None:
            values.setdefault("module_title", section.module_title)
        if "display_order" not in values:
            existing = QuizCategory.query.filter_by(
                module_code=values["module_code"],
                language_code=values["language_code"],
            ).count()
            values["display_order"] = existing + 1

        form, failure = self._validate(QuizCategoryForm, values)
        if failure:
            return failure

        category = QuizCategory(
            segment_code=str(uuid.uuid4()),
            section_ref=str(section.id) if section is not None else None,
            set_count=0,
            question_volume=0,
        )
        self._apply(category, form.model_dump())
        db.session.add(category)
        guards.adjust_book_category_count(category, 1)
        failure = self._commit("add category")
        if failure:
            return failure
        return {"success": True, "message": "Category added", "category": category}

    def update_category(self, category_id: int, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        category = db.session.get(QuizCategory, category_id)
        if category is None:
            return self._not_found("Category")
        values = dict(payload or {})
        for key in ("module_code", "module_title", "language_code"):
            values.setdefault(key, getattr(category, key))
        form, failure = self._validate(QuizCategoryForm, values)
        if failure:
            return failure

        moved = (form.module_code, form.language_code) != (
            category.module_code,
            category.language_code,
        )
        if moved:
            guards.shift_category(category, -1)
        # segmentCode is the category's public key; edits never regenerate it.
        self._apply(category, form.model_dump())
        if moved:
            section = guards.section_for_module(category.module_code, category.language_code)
            category.section_ref = str(section.id) if section is not None else None
            guards.shift_category(category, 1)
        failure = self._commit("update category")
        if failure:
            return failure
        return {"success": True, "message": "Category updated", "category": category}

    def delete_category(self, category_id: int) -> Dict[str, Any]:
        category = self._locked(QuizCategory, id=category_id)
        if category is None:
            return self._not_found("Category")
        return self._guarded_delete(
            category,
            "Category",
            guard=guards.ensure_category_deletable,
            before=lambda row: guards.adjust_book_category_count(row, -1),
        )

    # ============================================================================
    # QUIZZES
    # ============================================================================

    def segment_options(self):
        return (
            db.session.query(QuizCategory.segment_code, QuizCategory.segment_title)
            .order_by(QuizCategory.segment_title.asc())
            .all()
        )

    def list_quizzes(self, segment_code: str) -> Dict[str, Any]:
        quizzes = (
            Quiz.query.filter_by(segment_code=segment_code)
            .order_by(Quiz.created_at.desc())
            .all()
        )
        segments = [
            {"segment_code": code, "segment_title": title}
            for code, title in self.segment_options()
        ]
        return {
            "success": True,
            "segment_code": segment_code,
            "quizzes": quizzes,
            "segments": segments,
        }

    def get_quiz(self, quiz_key: str) -> Optional[Quiz]:
        return db.session.get(Quiz, quiz_key)

    def _segment_title(self, segment_code: str) -> str:
        category = guards.category_for_segment(segment_code)
        return category.segment_title if category else ""

    def create_quiz(self, segment_code: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        values = dict(payload or {})
        values.setdefault("segment_ref", segment_code)
        form, failure = self._validate(QuizForm, values)
        if failure:
            return failure

        quiz = Quiz(
            internal_quiz_key=str(uuid.uuid4()),
            quiz_title=form.quiz_title,
            quiz_status=form.quiz_status,
            language_code=form.language_code,
            cover_image_link=form.cover_image_link,
            segment_code=form.segment_ref,
            segment_title=self._segment_title(form.segment_ref),
            question_volume=0,
        )
        db.session.add(quiz)
        guards.adjust_set_count(quiz.segment_code, 1)
        failure = self._commit("add quiz")
        if failure:
            return failure
        return {"success": True, "message": "Quiz added", "quiz": quiz}

    def update_quiz(self, quiz_key: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        quiz = self.get_quiz(quiz_key)
        if quiz is None:
            return self._not_found("Quiz")
        values = dict(payload or {})
        values.setdefault("segment_ref", quiz.segment_code)
        values.setdefault("language_code", quiz.language_code)
        form, failure = self._validate(QuizForm, values)
        if failure:
            return failure

        guards.move_quiz_counts(quiz, quiz.segment_code, form.segment_ref)
        quiz.quiz_title = form.quiz_title
        quiz.quiz_status = form.quiz_status
        quiz.language_code = form.language_code
        quiz.segment_code = form.segment_ref
        quiz.segment_title = self._segment_title(form.segment_ref)
        if form.cover_image_link is not None:
            quiz.cover_image_link = form.cover_image_link
        failure = self._commit("update quiz")
        if failure:
            return failure
        return {"success": True, "message": "Quiz updated", "quiz": quiz}

    def delete_quiz(self, quiz_key: str) -> Dict[str, Any]:
        quiz = self._locked(Quiz, internal_quiz_key=quiz_key)
        if quiz is None:
            return self._not_found("Quiz")
        return self._guarded_delete(
            quiz,
            "Quiz",
            guard=guards.ensure_quiz_deletable,
            before=lambda row: guards.adjust_set_count(row.segment_code, -1),
        )
