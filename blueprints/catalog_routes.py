"""Catalog Routes Blueprint

Books, sections, categories, quizzes and questions. Each list row links to
its child collection so the dashboard can drill down level by level.
"""

from flask import Blueprint, request, url_for

from blueprints.helpers import (
    confirmation_prompt,
    payload,
    request_language,
    require_admin,
    respond,
)
from forms import QUESTION_TYPES, STATUS_OPTIONS
from services import get_catalog_service, get_question_service
from utils.pagination import parse_page

catalog_bp = Blueprint("catalog", __name__, url_prefix="/admin")
catalog_bp.before_request(require_admin)


# ============================================================================
# ROW RENDERING
# ============================================================================


def _book_row(book):
    row = book.to_dict()
    row["sections_url"] = url_for("catalog.list_sections", book_id=book.book_id)
    return row


def _section_row(section):
    row = section.to_dict()
    row["status_label"] = STATUS_OPTIONS.get(section.section_status, str(section.section_status))
    row["categories_url"] = url_for(
        "catalog.list_categories",
        module_code=section.module_code,
        lang=section.language_code,
        bookRef=section.book_ref,
    )
    return row


def _section_option(section):
    return {
        "id": section.id,
        "module_code": section.module_code,
        "module_title": section.module_title,
    }


def _category_row(category):
    row = category.to_dict()
    row["status_label"] = STATUS_OPTIONS.get(category.category_status, str(category.category_status))
    row["quizzes_url"] = url_for("catalog.list_quizzes", segment_code=category.segment_code)
    return row


def _quiz_row(quiz):
    row = quiz.to_dict()
    row["status_label"] = STATUS_OPTIONS.get(quiz.quiz_status, str(quiz.quiz_status))
    row["questions_url"] = url_for("catalog.list_questions", quiz_key=quiz.internal_quiz_key)
    return row


def _question_row(question):
    row = question.to_dict()
    row["type_label"] = QUESTION_TYPES.get(question.question_type, str(question.question_type))
    return row


# ============================================================================
# EXAM BOOKS
# ============================================================================


@catalog_bp.route("/books", methods=["GET"])
def list_books():
    result = get_catalog_service().list_books(parse_page(request.args.get("page")))
    return respond(result, books=_book_row)


@catalog_bp.route("/books", methods=["POST"])
def create_book():
    result = get_catalog_service().create_book(payload())
    return respond(result, 201, book=_book_row)


@catalog_bp.route("/books/<int:book_pk>", methods=["PUT"])
def update_book(book_pk: int):
    result = get_catalog_service().update_book(book_pk, payload())
    return respond(result, book=_book_row)


@catalog_bp.route("/books/<int:book_pk>", methods=["DELETE"])
def delete_book(book_pk: int):
    prompt = confirmation_prompt("book")
    if prompt:
        return prompt
    return respond(get_catalog_service().delete_book(book_pk))


# ============================================================================
# QUIZ SECTIONS
# ============================================================================


@catalog_bp.route("/books/<book_id>/sections", methods=["GET"])
def list_sections(book_id: str):
    result = get_catalog_service().list_sections(book_id, request_language())
    return respond(result, sections=_section_row, book=_book_row)


@catalog_bp.route("/books/<book_id>/sections", methods=["POST"])
def create_section(book_id: str):
    result = get_catalog_service().create_section(book_id, payload(), request_language())
    return respond(result, 201, section=_section_row)


@catalog_bp.route("/sections/<int:section_id>", methods=["PUT"])
def update_section(section_id: int):
    result = get_catalog_service().update_section(section_id, payload())
    return respond(result, section=_section_row)


@catalog_bp.route("/sections/<int:section_id>", methods=["DELETE"])
def delete_section(section_id: int):
    prompt = confirmation_prompt("section")
    if prompt:
        return prompt
    return respond(get_catalog_service().delete_section(section_id))


# ============================================================================
# QUIZ CATEGORIES
# ============================================================================


@catalog_bp.route("/sections/<module_code>/categories", methods=["GET"])
def list_categories(module_code: str):
    result = get_catalog_service().list_categories(module_code, request_language())
    return respond(result, categories=_category_row, sections=_section_option)


@catalog_bp.route("/sections/<module_code>/categories", methods=["POST"])
def create_category(module_code: str):
    result = get_catalog_service().create_category(module_code, payload(), request_language())
    return respond(result, 201, category=_category_row)


@catalog_bp.route("/categories/<int:category_id>", methods=["PUT"])
def update_category(category_id: int):
    result = get_catalog_service().update_category(category_id, payload())
    return respond(result, category=_category_row)


@catalog_bp.route("/categories/<int:category_id>", methods=["DELETE"])
def delete_category(category_id: int):
    prompt = confirmation_prompt("category")
    if prompt:
        return prompt
    return respond(get_catalog_service().delete_category(category_id))


# ============================================================================
# QUIZZES
# ============================================================================


@catalog_bp.route("/categories/<segment_code>/quizzes", methods=["GET"])
def list_quizzes(segment_code: str):
    result = get_catalog_service().list_quizzes(segment_code)
    return respond(result, quizzes=_quiz_row)


@catalog_bp.route("/categories/<segment_code>/quizzes", methods=["POST"])
def create_quiz(segment_code: str):
    result = get_catalog_service().create_quiz(segment_code, payload())
    return respond(result, 201, quiz=_quiz_row)


@catalog_bp.route("/quizzes/<quiz_key>", methods=["PUT"])
def update_quiz(quiz_key: str):
    result = get_catalog_service().update_quiz(quiz_key, payload())
    return respond(result, quiz=_quiz_row)


@catalog_bp.route("/quizzes/<quiz_key>", methods=["DELETE"])
def delete_quiz(quiz_key: str):
    prompt = confirmation_prompt("quiz")
    if prompt:
        return prompt
    return respond(get_catalog_service().delete_quiz(quiz_key))


# ============================================================================
# QUESTIONS
# ============================================================================


@catalog_bp.route("/quizzes/<quiz_key>/questions", methods=["GET"])
def list_questions(quiz_key: str):
    result = get_question_service().list_questions(
        quiz_key, parse_page(request.args.get("page"))
    )
    return respond(result, questions=_question_row)


@catalog_bp.route("/quizzes/<quiz_key>/questions", methods=["POST"])
def create_question(quiz_key: str):
    result = get_question_service().create_question(quiz_key, payload())
    return respond(result, 201, question=_question_row)


@catalog_bp.route("/questions/<question_id>", methods=["PUT"])
def update_question(question_id: str):
    result = get_question_service().update_question(question_id, payload())
    return respond(result, question=_question_row)


@catalog_bp.route("/questions/<question_id>", methods=["DELETE"])
def delete_question(question_id: str):
    prompt = confirmation_prompt("question")
    if prompt:
        return prompt
    return respond(get_question_service().delete_question(question_id))
