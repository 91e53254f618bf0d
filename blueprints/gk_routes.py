"""General-knowledge subjects, topics and one-liner questions."""

from flask import Blueprint, url_for

from blueprints.helpers import (
    confirmation_prompt,
    payload,
    request_language,
    require_admin,
    respond,
)
from services import get_gk_service

gk_bp = Blueprint("gk", __name__, url_prefix="/admin/gk")
gk_bp.before_request(require_admin)


def _subject_row(subject):
    row = subject.to_dict()
    row["topics_url"] = url_for(
        "gk.list_topics", subject_id=subject.id, lang=subject.language_code
    )
    return row


def _topic_row(topic):
    row = topic.to_dict()
    row["questions_url"] = url_for(
        "gk.list_questions", topic_id=topic.id, language=topic.language_code
    )
    return row


def _question_row(question):
    return question.to_dict()


# ------------------------------------------------------------------ #
# Subjects
# ------------------------------------------------------------------ #


@gk_bp.route("/subjects", methods=["GET"])
def list_subjects():
    result = get_gk_service().list_subjects(request_language())
    return respond(result, subjects=_subject_row)


@gk_bp.route("/subjects", methods=["POST"])
def create_subject():
    result = get_gk_service().create_subject(payload(), request_language())
    return respond(result, 201, subject=_subject_row)


@gk_bp.route("/subjects/<subject_id>", methods=["PUT"])
def update_subject(subject_id: str):
    result = get_gk_service().update_subject(subject_id, payload())
    return respond(result, subject=_subject_row)


@gk_bp.route("/subjects/<subject_id>", methods=["DELETE"])
def delete_subject(subject_id: str):
    prompt = confirmation_prompt("subject")
    if prompt:
        return prompt
    return respond(get_gk_service().delete_subject(subject_id))


# ------------------------------------------------------------------ #
# Topics
# ------------------------------------------------------------------ #


@gk_bp.route("/subjects/<subject_id>/topics", methods=["GET"])
def list_topics(subject_id: str):
    result = get_gk_service().list_topics(subject_id, request_language())
    return respond(result, topics=_topic_row, subject=_subject_row)


@gk_bp.route("/subjects/<subject_id>/topics", methods=["POST"])
def create_topic(subject_id: str):
    result = get_gk_service().create_topic(subject_id, payload(), request_language())
    return respond(result, 201, topic=_topic_row)


@gk_bp.route("/topics/<topic_id>", methods=["PUT"])
def update_topic(topic_id: str):
    result = get_gk_service().update_topic(topic_id, payload())
    return respond(result, topic=_topic_row)


@gk_bp.route("/topics/<topic_id>", methods=["DELETE"])
def delete_topic(topic_id: str):
    prompt = confirmation_prompt("topic")
    if prompt:
        return prompt
    return respond(get_gk_service().delete_topic(topic_id))


# ------------------------------------------------------------------ #
# One-liner questions
# ------------------------------------------------------------------ #


@gk_bp.route("/topics/<topic_id>/questions", methods=["GET"])
def list_questions(topic_id: str):
    result = get_gk_service().list_questions(topic_id, request_language())
    return respond(result, questions=_question_row, topic=_topic_row)


@gk_bp.route("/topics/<topic_id>/questions", methods=["POST"])
def create_question(topic_id: str):
    result = get_gk_service().create_question(topic_id, payload(), request_language())
    return respond(result, 201, question=_question_row)


@gk_bp.route("/questions/<question_id>", methods=["PUT"])
def update_question(question_id: str):
    result = get_gk_service().update_question(question_id, payload())
    return respond(result, question=_question_row)


@gk_bp.route("/questions/<question_id>", methods=["DELETE"])
def delete_question(question_id: str):
    prompt = confirmation_prompt("question")
    if prompt:
        return prompt
    return respond(get_gk_service().delete_question(question_id))
