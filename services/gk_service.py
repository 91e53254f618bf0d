"""General-knowledge subjects, topics and one-liner questions."""

from typing import Any, Dict, Optional

from extensions import db
from forms import GKOneLinerQuestionForm, GKSubjectForm, GKTopicForm
from models import GKOneLinerQuestion, GKSubject, GKTopic
from services import guards
from services.base_service import BaseService


class GKService(BaseService):
    """Service class for the GK subject → topic → one-liner levels."""

    DEFAULT_SUBJECT_LANGUAGE = "hi"
    DEFAULT_QUESTION_LANGUAGE = "en"

    # ------------------------------------------------------------------ #
    # Subjects
    # ------------------------------------------------------------------ #

    def list_subjects(self, language_code: Optional[str] = None) -> Dict[str, Any]:
        language_code = language_code or self.DEFAULT_SUBJECT_LANGUAGE
        subjects = (
            GKSubject.query.filter_by(language_code=language_code)
            .order_by(GKSubject.created_at.desc())
            .all()
        )
        return {"success": True, "language_code": language_code, "subjects": subjects}

    def create_subject(
        self, payload: Optional[Dict[str, Any]], language_code: Optional[str] = None
    ) -> Dict[str, Any]:
        values = dict(payload or {})
        values.setdefault("language_code", language_code or self.DEFAULT_SUBJECT_LANGUAGE)
        form, failure = self._validate(GKSubjectForm, values)
        if failure:
            return failure

        subject = GKSubject(title=form.title, language_code=form.language_code)
        db.session.add(subject)
        failure = self._commit("add subject")
        if failure:
            return failure
        return {"success": True, "message": "Subject added", "subject": subject}

    def update_subject(self, subject_id: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        subject = db.session.get(GKSubject, subject_id)
        if subject is None:
            return self._not_found("Subject")
        form, failure = self._validate(GKSubjectForm, payload)
        if failure:
            return failure

        self._apply(subject, form.model_dump())
        failure = self._commit("update subject")
        if failure:
            return failure
        return {"success": True, "message": "Subject updated", "subject": subject}

    def delete_subject(self, subject_id: str) -> Dict[str, Any]:
        subject = self._locked(GKSubject, id=subject_id)
        if subject is None:
            return self._not_found("Subject")
        return self._guarded_delete(
            subject,
            "Subject",
            guard=lambda row: guards.ensure_no_children(
                GKTopic.query.filter_by(subject_id=row.id).count(),
                "subject",
                row.title,
                "topics",
            ),
        )

    # ------------------------------------------------------------------ #
    # Topics
    # ------------------------------------------------------------------ #

    def list_topics(self, subject_id: str, language_code: Optional[str] = None) -> Dict[str, Any]:
        subject = db.session.get(GKSubject, subject_id)
        language_code = language_code or (
            subject.language_code if subject else self.DEFAULT_SUBJECT_LANGUAGE
        )
        topics = (
            GKTopic.query.filter_by(subject_id=subject_id, language_code=language_code)
            .order_by(GKTopic.created_at.desc())
            .all()
        )
        return {
            "success": True,
            "subject": subject,
            "language_code": language_code,
            "topics": topics,
        }

    def create_topic(
        self,
        subject_id: str,
        payload: Optional[Dict[str, Any]],
        language_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        subject = db.session.get(GKSubject, subject_id)
        if subject is None:
            return self._not_found("Subject")
        form, failure = self._validate(GKTopicForm, payload)
        if failure:
            return failure

        topic = GKTopic(
            title=form.title,
            subject_id=subject_id,
            language_code=language_code or subject.language_code,
        )
        db.session.add(topic)
        failure = self._commit("add topic")
        if failure:
            return failure
        return {"success": True, "message": "Topic added", "topic": topic}

    def update_topic(self, topic_id: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        topic = db.session.get(GKTopic, topic_id)
        if topic is None:
            return self._not_found("Topic")
        form, failure = self._validate(GKTopicForm, payload)
        if failure:
            return failure

        topic.title = form.title
        failure = self._commit("update topic")
        if failure:
            return failure
        return {"success": True, "message": "Topic updated", "topic": topic}

    def delete_topic(self, topic_id: str) -> Dict[str, Any]:
        topic = self._locked(GKTopic, id=topic_id)
        if topic is None:
            return self._not_found("Topic")
        return self._guarded_delete(
            topic,
            "Topic",
            guard=lambda row: guards.ensure_no_children(
                GKOneLinerQuestion.query.filter_by(topic_id=row.id).count(),
                "topic",
                row.title,
                "questions",
            ),
        )

    # ------------------------------------------------------------------ #
    # One-liner questions
    # ------------------------------------------------------------------ #

    def list_questions(self, topic_id: str, language_code: Optional[str] = None) -> Dict[str, Any]:
        language_code = language_code or self.DEFAULT_QUESTION_LANGUAGE
        questions = (
            GKOneLinerQuestion.query.filter_by(topic_id=topic_id, language_code=language_code)
            .order_by(GKOneLinerQuestion.created_at.desc())
            .all()
        )
        return {
            "success": True,
            "topic": db.session.get(GKTopic, topic_id),
            "language_code": language_code,
            "questions": questions,
        }

    def create_question(
        self,
        topic_id: str,
        payload: Optional[Dict[str, Any]],
        language_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        if db.session.get(GKTopic, topic_id) is None:
            return self._not_found("Topic")
        form, failure = self._validate(GKOneLinerQuestionForm, payload)
        if failure:
            return failure

        question = GKOneLinerQuestion(
            question=form.question,
            topic_id=topic_id,
            language_code=language_code or self.DEFAULT_QUESTION_LANGUAGE,
        )
        db.session.add(question)
        failure = self._commit("add question")
        if failure:
            return failure
        return {"success": True, "message": "Question added", "question": question}

    def update_question(self, question_id: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        question = db.session.get(GKOneLinerQuestion, question_id)
        if question is None:
            return self._not_found("Question")
        form, failure = self._validate(GKOneLinerQuestionForm, payload)
        if failure:
            return failure

        question.question = form.question
        failure = self._commit("update question")
        if failure:
            return failure
        return {"success": True, "message": "Question updated", "question": question}

    def delete_question(self, question_id: str) -> Dict[str, Any]:
        question = self._locked(GKOneLinerQuestion, id=question_id)
        if question is None:
            return self._not_found("Question")
        return self._guarded_delete(question, "Question")
