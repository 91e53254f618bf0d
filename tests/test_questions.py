"""Question dialog rules, question paging and the report queue."""

import pytest

from extensions import db
from models import Question, QuestionReport, Quiz


@pytest.fixture()
def quiz(catalog):
    book = catalog.book()
    catalog.section(book, lang="hi")
    category = catalog.category(lang="hi")
    return catalog.quiz(category)


def _report(question_id, player="player-1", reason="Wrong answer"):
    report = QuestionReport(question_id=question_id, player_id=player, reason=reason)
    db.session.add(report)
    db.session.commit()
    return report.id


def test_true_false_question_is_normalized(catalog, quiz, fresh):
    question = catalog.question(
        quiz,
        question_type="2",
        option_a="yes",
        option_b="no",
        option_c="maybe",
        option_d="",
        correct_answer="B",
        note_text="",
        previously_asked_in="",
    )

    row = fresh(Question, question["question_id"])
    assert (row.option_a, row.option_b) == ("True", "False")
    assert row.option_c is None and row.option_d is None
    assert row.correct_answer == "b"
    assert row.note_text == ""
    assert row.previously_asked_in is None
    assert question["type_label"] == "True/False"


def test_true_false_rejects_third_answer(admin_client, quiz):
    response = admin_client.post(
        f"/admin/quizzes/{quiz['internal_quiz_key']}/questions",
        json={"question_type": 2, "question_text": "Sky is blue", "correct_answer": "c"},
    )
    assert response.status_code == 400
    assert "correct_answer" in response.get_json()["errors"]


def test_multiple_choice_needs_options_and_text(admin_client, quiz):
    response = admin_client.post(
        f"/admin/quizzes/{quiz['internal_quiz_key']}/questions",
        json={
            "question_type": 1,
            "question_text": "<p><br></p>",
            "option_a": "",
            "option_b": "4",
            "language_code": "en",
        },
    )
    assert response.status_code == 400
    errors = response.get_json()["errors"]
    assert errors["option_a"] == "Option A is required"
    assert errors["question_text"] == "Question text is required"
    assert errors["correct_answer"] == "Please select the correct answer"


def test_question_for_unknown_quiz_is_404(admin_client):
    response = admin_client.post("/admin/quizzes/missing/questions", json={})
    assert response.status_code == 404


def test_questions_are_paged_ten_at_a_time(admin_client, catalog, quiz, fresh):
    for index in range(12):
        catalog.question(quiz, question_text=f"<p>Question {index}</p>")

    first = admin_client.get(f"/admin/quizzes/{quiz['internal_quiz_key']}/questions").get_json()
    assert len(first["questions"]) == 10
    assert first["pagination"]["total_pages"] == 2

    second = admin_client.get(
        f"/admin/quizzes/{quiz['internal_quiz_key']}/questions?page=2"
    ).get_json()
    assert len(second["questions"]) == 2
    assert fresh(Quiz, quiz["internal_quiz_key"]).question_volume == 12


def test_update_question_switches_type(admin_client, catalog, quiz, fresh):
    question = catalog.question(quiz)
    response = admin_client.put(
        f"/admin/questions/{question['question_id']}",
        json={
            "question_type": 2,
            "question_text": "<p>4 is even</p>",
            "correct_answer": "a",
            "language_code": "en",
        },
    )
    assert response.status_code == 200
    row = fresh(Question, question["question_id"])
    assert row.question_type == 2
    assert (row.option_a, row.option_b, row.option_c) == ("True", "False", None)


def test_reports_link_to_their_question(admin_client, catalog, quiz):
    question = catalog.question(quiz)
    _report(question["question_id"])

    body = admin_client.get("/admin/question-reports").get_json()
    assert body["pagination"]["total"] == 1
    report = body["reports"][0]
    assert report["status"] == "pending"
    assert report["question_url"] == (
        f"/admin/question-reports/{question['question_id']}/question"
    )

    body = admin_client.get(report["question_url"]).get_json()
    assert body["question"]["question_id"] == question["question_id"]
    assert body["form"]["option_c"] == "5"


def test_reported_question_missing(admin_client):
    response = admin_client.get("/admin/question-reports/gone/question")
    assert response.status_code == 404
    assert response.get_json()["error"] == "Failed to fetch question"


def test_editing_reported_question_uses_dialog_rules(admin_client, catalog, quiz, fresh):
    question = catalog.question(quiz)
    _report(question["question_id"])

    response = admin_client.put(
        f"/admin/question-reports/{question['question_id']}/question",
        json={
            "question_type": 2,
            "question_text": "<p>4 is even</p>",
            "option_c": "left over",
            "correct_answer": "A",
            "language_code": "en",
        },
    )
    assert response.status_code == 200
    row = fresh(Question, question["question_id"])
    assert row.option_c is None
    assert row.correct_answer == "a"


def test_resolve_marks_every_report(admin_client, catalog, quiz, fresh):
    question = catalog.question(quiz)
    first = _report(question["question_id"], player="p1")
    second = _report(question["question_id"], player="p2")

    response = admin_client.post(
        f"/admin/question-reports/{question['question_id']}/resolve"
    )
    assert response.status_code == 200
    assert response.get_json()["resolved"] == 2
    assert fresh(QuestionReport, first).status == "resolved"
    assert fresh(QuestionReport, second).status == "resolved"


def test_resolve_without_reports_is_404(admin_client):
    response = admin_client.post("/admin/question-reports/none/resolve")
    assert response.status_code == 404
