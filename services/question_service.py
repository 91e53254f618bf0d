"""Question Service Module

Quiz questions and the player reports raised against them.
"""

import uuid
from typing import Any, Dict, Optional

from extensions import db
from forms import QuestionForm
from models import Question, QuestionReport, Quiz
from services import guards
from services.base_service import BaseService
from utils.pagination import QUESTIONS_PER_PAGE, REPORTS_PER_PAGE, paginate

RESOLVED = "resolved"


def form_values(question: Question) -> Dict[str, Any]:
    """Values that pre-fill the question dialog for an existing question."""
    return {
        "question_type": question.question_type,
        "correct_answer": question.correct_answer,
        "option_a": question.option_a,
        "option_b": question.option_b,
        "option_c": question.option_c or "",
        "option_d": question.option_d or "",
        "previously_asked_in": question.previously_asked_in or "",
        "language_code": question.language_code,
        "question_text": question.question_text,
        "note_text": question.note_text or "",
    }


class QuestionService(BaseService):
    """Service class for questions and question reports."""

    # ============================================================================
    # QUESTIONS
    # ============================================================================

    def list_questions(
        self, quiz_key: str, page: int = 1, per_page: int = QUESTIONS_PER_PAGE
    ) -> Dict[str, Any]:
        stmt = (
            db.select(Question)
            .filter_by(quiz_id=quiz_key)
            .order_by(Question.created_at.desc())
        )
        questions, meta = paginate(stmt, page, per_page)
        return {
            "success": True,
            "quiz_key": quiz_key,
            "questions": questions,
            "pagination": meta,
        }

    def get_question(self, question_id: str) -> Optional[Question]:
        return db.session.get(Question, question_id)

    def create_question(self, quiz_key: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        quiz = db.session.get(Quiz, quiz_key)
        if quiz is None:
            return self._not_found("Quiz")
        form, failure = self._validate(QuestionForm, payload)
        if failure:
            return failure

        question = Question(question_id=uuid.uuid4().hex, quiz_id=quiz_key)
        self._apply(question, form.to_record())
        db.session.add(question)
        guards.adjust_question_volume(quiz, 1)
        failure = self._commit("add question")
        if failure:
            return failure
        return {"success": True, "message": "Question added", "question": question}

    def update_question(self, question_id: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        question = self.get_question(question_id)
        if question is None:
            return self._not_found("Question")
        form, failure = self._validate(QuestionForm, payload)
        if failure:
            return failure

        self._apply(question, form.to_record())
        failure = self._commit("update question")
        if failure:
            return failure
        return {"success": True, "message": "Question updated", "question": question}

    def delete_question(self, question_id: str) -> Dict[str, Any]:
        question = self._locked(Question, question_id=question_id)
        if question is None:
            return self._not_found("Question")
        return self._guarded_delete(
            question,
            "Question",
            before=lambda row: guards.adjust_question_volume(
                db.session.get(Quiz, row.quiz_id), -1
            ),
        )

    # ============================================================================
    # QUESTION REPORTS
    # ============================================================================

    def list_reports(self, page: int = 1, per_page: int = REPORTS_PER_PAGE) -> Dict[str, Any]:
        stmt = db.select(QuestionReport).order_by(QuestionReport.created_at.desc())
        reports, meta = paginate(stmt, page, per_page)
        return {"success": True, "reports": reports, "pagination": meta}

    def get_reported_question(self, question_id: str) -> Dict[str, Any]:
        question = self.get_question(question_id)
        if question is None:
            return self._failure("Failed to fetch question", 404)
        return {"success": True, "question": question, "form": form_values(question)}

    def resolve_reports(self, question_id: str) -> Dict[str, Any]:
        """Mark every report raised against ``question_id`` as resolved."""
        updated = QuestionReport.query.filter_by(question_id=question_id).update(
            {QuestionReport.status: RESOLVED}, synchronize_session="fetch"
        )
        if not updated:
            db.session.rollback()
            return self._failure("No reports found for this question", 404)
        failure = self._commit("mark as resolved")
        if failure:
            return failure
        return {"success": True, "message": "Marked as resolved", "resolved": updated}
