"""Route tests for books, sections, categories and quizzes."""

from extensions import db
from models import ExamBook, Quiz, QuizCategory, QuizSection


def test_catalog_requires_admin_session(client):
    response = client.get("/admin/books")
    assert response.status_code == 401

    with client.session_transaction() as sess:
        sess["admin_id"] = 7
        sess["is_admin"] = False
    response = client.get("/admin/books")
    assert response.status_code == 403
    assert response.get_json()["error"] == "You are not authorized to access this page"


def test_create_book_rejects_bad_icon(admin_client):
    response = admin_client.post(
        "/admin/books",
        json={"title": "SSC", "subtitle": "Tier I", "icon": "not a url"},
    )
    assert response.status_code == 400
    body = response.get_json()
    assert body["success"] is False
    assert body["errors"]["icon"] == "Icon must be a valid URL"


def test_books_are_paged_five_at_a_time(admin_client, catalog):
    for index in range(6):
        catalog.book(title=f"Book {index}", order=index)

    first = admin_client.get("/admin/books").get_json()
    assert [row["title"] for row in first["books"]] == [f"Book {i}" for i in range(5)]
    assert first["pagination"]["total"] == 6
    assert first["pagination"]["has_next"] is True
    assert first["books"][0]["sections_url"].startswith("/admin/books/")

    second = admin_client.get("/admin/books?page=2").get_json()
    assert [row["title"] for row in second["books"]] == ["Book 5"]
    assert second["pagination"]["has_prev"] is True


def test_update_book(admin_client, catalog, fresh):
    book = catalog.book()
    response = admin_client.put(
        f"/admin/books/{book['id']}",
        json={
            "title": "SSC CHSL",
            "subtitle": "Tier II",
            "icon": "https://cdn.example.com/chsl.png",
            "order": 3,
        },
    )
    assert response.status_code == 200
    assert fresh(ExamBook, book["id"]).title == "SSC CHSL"


def test_delete_asks_for_confirmation(admin_client, catalog, fresh):
    book = catalog.book()

    response = admin_client.delete(f"/admin/books/{book['id']}")
    assert response.status_code == 400
    body = response.get_json()
    assert body["confirmation_required"] is True
    assert body["message"] == (
        "Are you sure you want to delete this book? This action cannot be undone."
    )
    assert fresh(ExamBook, book["id"]) is not None

    response = admin_client.delete(f"/admin/books/{book['id']}", json={"confirm": True})
    assert response.status_code == 200
    assert fresh(ExamBook, book["id"]) is None


def test_book_delete_blocked_while_categories_exist(admin_client, catalog, fresh):
    book = catalog.book()
    catalog.section(book, lang="hi")
    category = catalog.category(lang="hi")
    assert fresh(ExamBook, book["id"]).total_category_hi == 1

    response = admin_client.delete(f"/admin/books/{book['id']}?confirm=true")
    assert response.status_code == 409
    body = response.get_json()
    assert body["blocked"] is True
    assert body["details"] == {"hi": 1, "en": 0, "title": "SSC CGL"}

    response = admin_client.delete(f"/admin/categories/{category['id']}?confirm=true")
    assert response.status_code == 200
    assert fresh(ExamBook, book["id"]).total_category_hi == 0

    response = admin_client.delete(f"/admin/books/{book['id']}?confirm=true")
    assert response.status_code == 200


def test_sections_default_to_hindi(admin_client, catalog):
    book = catalog.book()
    admin_client.post(
        f"/admin/books/{book['book_id']}/sections",
        json={"module_code": "GS", "module_title": "General Studies"},
    )
    catalog.section(book, lang="en", module_code="ENG", module_title="English")

    body = admin_client.get(f"/admin/books/{book['book_id']}/sections").get_json()
    assert body["language_code"] == "hi"
    assert [row["module_code"] for row in body["sections"]] == ["GS"]
    assert body["sections"][0]["status_label"] == "Live"
    assert body["book"]["title"] == "SSC CGL"

    body = admin_client.get(f"/admin/books/{book['book_id']}/sections?lang=en").get_json()
    assert [row["module_code"] for row in body["sections"]] == ["ENG"]


def test_section_rejects_bad_icon_link(admin_client, catalog):
    book = catalog.book()
    response = admin_client.post(
        f"/admin/books/{book['book_id']}/sections",
        json={"module_code": "GS", "module_title": "GS", "icon_link": "ftp//nope"},
    )
    assert response.status_code == 400
    assert response.get_json()["errors"]["icon_link"] == "Icon must be a valid URL"


def test_category_defaults_from_section(admin_client, catalog):
    book = catalog.book()
    section = catalog.section(book, lang="hi")
    first = catalog.category(lang="hi", segment_title="Algebra")
    second = catalog.category(lang="hi", segment_title="Geometry")

    assert first["module_title"] == "Mathematics"
    assert first["section_ref"] == str(section["id"])
    assert first["display_order"] == 1
    assert second["display_order"] == 2
    assert first["segment_code"] != second["segment_code"]

    body = admin_client.get("/admin/sections/MATH/categories?lang=hi").get_json()
    assert [row["segment_title"] for row in body["categories"]] == ["Algebra", "Geometry"]
    assert body["module_title"] == "Mathematics"
    assert body["sections"][0]["module_code"] == "MATH"


def test_category_update_keeps_segment_code(admin_client, catalog, fresh):
    book = catalog.book()
    catalog.section(book, lang="hi")
    catalog.section(book, lang="en")
    category = catalog.category(lang="hi")

    response = admin_client.put(
        f"/admin/categories/{category['id']}",
        json={
            "segment_title": "Advanced Algebra",
            "display_order": 4,
            "category_status": 0,
            "language_code": "en",
            "module_code": "MATH",
            "module_title": "Mathematics",
        },
    )
    assert response.status_code == 200
    body = response.get_json()["category"]
    assert body["segment_code"] == category["segment_code"]
    assert body["status_label"] == "Draft"

    row = fresh(ExamBook, book["id"])
    assert (row.total_category_hi, row.total_category_en) == (0, 1)


def test_question_counts_roll_up_and_block_deletes(admin_client, catalog, fresh):
    book = catalog.book()
    section = catalog.section(book, lang="hi")
    category = catalog.category(lang="hi")
    quiz = catalog.quiz(category)
    first = catalog.question(quiz)
    catalog.question(quiz)

    row = fresh(QuizCategory, category["id"])
    assert (row.set_count, row.question_volume) == (1, 2)
    row = fresh(QuizSection, section["id"])
    assert (row.set_count, row.question_volume) == (1, 2)

    response = admin_client.delete(f"/admin/quizzes/{quiz['internal_quiz_key']}?confirm=true")
    assert response.status_code == 409
    body = response.get_json()
    assert body["error"] == "Please delete all questions first before deleting this quiz."
    assert body["details"]["question_volume"] == 2

    response = admin_client.delete(f"/admin/sections/{section['id']}?confirm=true")
    assert response.status_code == 409

    response = admin_client.delete(f"/admin/categories/{category['id']}?confirm=true")
    assert response.status_code == 409
    assert response.get_json()["details"]["set_count"] == 1

    response = admin_client.delete(f"/admin/questions/{first['question_id']}?confirm=true")
    assert response.status_code == 200
    assert fresh(QuizCategory, category["id"]).question_volume == 1


def test_quiz_list_and_segment_title(admin_client, catalog):
    book = catalog.book()
    catalog.section(book, lang="hi")
    category = catalog.category(lang="hi", segment_title="Algebra")
    quiz = catalog.quiz(category, quiz_title="Algebra Set 1")

    assert quiz["segment_title"] == "Algebra"
    assert quiz["questions_url"] == f"/admin/quizzes/{quiz['internal_quiz_key']}/questions"

    body = admin_client.get(f"/admin/categories/{category['segment_code']}/quizzes").get_json()
    assert [row["quiz_title"] for row in body["quizzes"]] == ["Algebra Set 1"]
    assert body["segments"] == [
        {"segment_code": category["segment_code"], "segment_title": "Algebra"}
    ]


def test_moving_quiz_moves_its_counts(admin_client, catalog, fresh):
    book = catalog.book()
    catalog.section(book, lang="hi")
    source = catalog.category(lang="hi", segment_title="Algebra")
    target = catalog.category(lang="hi", segment_title="Geometry")
    quiz = catalog.quiz(source)
    catalog.question(quiz)

    response = admin_client.put(
        f"/admin/quizzes/{quiz['internal_quiz_key']}",
        json={
            "quiz_title": "Set 1",
            "quiz_status": 1,
            "language_code": "hi",
            "segment_ref": target["segment_code"],
        },
    )
    assert response.status_code == 200
    assert response.get_json()["quiz"]["segment_title"] == "Geometry"

    moved_from = fresh(QuizCategory, source["id"])
    moved_to = fresh(QuizCategory, target["id"])
    assert (moved_from.set_count, moved_from.question_volume) == (0, 0)
    assert (moved_to.set_count, moved_to.question_volume) == (1, 1)


def test_empty_quiz_delete_releases_set_count(admin_client, catalog, fresh):
    book = catalog.book()
    catalog.section(book, lang="hi")
    category = catalog.category(lang="hi")
    quiz = catalog.quiz(category)

    response = admin_client.delete(f"/admin/quizzes/{quiz['internal_quiz_key']}?confirm=true")
    assert response.status_code == 200
    assert fresh(QuizCategory, category["id"]).set_count == 0


def test_missing_rows_are_404(admin_client):
    assert admin_client.put("/admin/books/999", json={}).status_code == 404
    assert admin_client.delete("/admin/sections/999?confirm=true").status_code == 404
    assert admin_client.delete("/admin/quizzes/nope?confirm=true").status_code == 404


def test_book_edit_keeps_category_counts(admin_client, catalog, fresh):
    book = catalog.book()
    catalog.section(book, lang="en")
    catalog.category(lang="en")

    response = admin_client.put(
        f"/admin/books/{book['id']}",
        json={"title": "SSC CGL 2026", "subtitle": "Tier I", "icon": book["icon"]},
    )
    assert response.status_code == 200
    assert fresh(ExamBook, book["id"]).total_category_en == 1


def test_quiz_rename_keeps_segment(admin_client, catalog, fresh):
    book = catalog.book()
    catalog.section(book, lang="hi")
    category = catalog.category(lang="hi")
    quiz = catalog.quiz(category)

    response = admin_client.put(
        f"/admin/quizzes/{quiz['internal_quiz_key']}", json={"quiz_title": "Set 1 (revised)"}
    )
    assert response.status_code == 200
    assert response.get_json()["quiz"]["segment_code"] == category["segment_code"]
    assert fresh(QuizCategory, category["id"]).set_count == 1


def test_section_delete_blocked_while_categories_exist(admin_client, catalog, fresh):
    book = catalog.book()
    section = catalog.section(book, lang="hi")
    category = catalog.category(lang="hi")

    response = admin_client.delete(f"/admin/sections/{section['id']}?confirm=true")
    assert response.status_code == 409
    assert response.get_json()["details"]["categories"] == 1

    assert admin_client.delete(f"/admin/categories/{category['id']}?confirm=true").status_code == 200
    assert fresh(ExamBook, book["id"]).total_category_hi == 0
    assert admin_client.delete(f"/admin/sections/{section['id']}?confirm=true").status_code == 200
    assert admin_client.delete(f"/admin/books/{book['id']}?confirm=true").status_code == 200


def test_category_language_move_carries_section_counts(admin_client, catalog, fresh):
    book = catalog.book()
    hindi = catalog.section(book, lang="hi")
    english = catalog.section(book, lang="en")
    category = catalog.category(lang="hi")
    catalog.quiz(category)

    response = admin_client.put(
        f"/admin/categories/{category['id']}", json={"segment_title": "Algebra", "language_code": "en"}
    )
    assert response.status_code == 200
    assert response.get_json()["category"]["section_ref"] == str(english["id"])

    assert fresh(QuizSection, hindi["id"]).set_count == 0
    assert fresh(QuizSection, english["id"]).set_count == 1
    row = fresh(ExamBook, book["id"])
    assert (row.total_category_hi, row.total_category_en) == (0, 1)

    assert admin_client.delete(f"/admin/sections/{hindi['id']}?confirm=true").status_code == 200
    assert admin_client.delete(f"/admin/sections/{english['id']}?confirm=true").status_code == 409


def test_section_moved_to_another_book_carries_category_totals(admin_client, catalog, fresh):
    first = catalog.book(title="SSC CGL")
    second = catalog.book(title="SSC CHSL")
    section = catalog.section(first, lang="hi")
    catalog.category(lang="hi")

    response = admin_client.put(
        f"/admin/sections/{section['id']}",
        json={"module_code": "MATH", "module_title": "Mathematics", "book_ref": second["book_id"]},
    )
    assert response.status_code == 200
    assert fresh(ExamBook, first["id"]).total_category_hi == 0
    assert fresh(ExamBook, second["id"]).total_category_hi == 1
    assert admin_client.delete(f"/admin/books/{first['id']}?confirm=true").status_code == 200


def test_sections_sharing_a_module_code_keep_their_own_counts(admin_client, catalog, fresh):
    first = catalog.book(title="SSC CGL")
    second = catalog.book(title="SSC CHSL")
    section_ids = {
        catalog.section(first, lang="hi")["id"],
        catalog.section(second, lang="hi")["id"],
    }
    category = catalog.category(lang="hi")
    catalog.quiz(category)

    owner = int(category["section_ref"])
    (other,) = section_ids - {owner}
    assert fresh(QuizSection, owner).set_count == 1
    assert fresh(QuizSection, other).set_count == 0
    assert admin_client.delete(f"/admin/sections/{other}?confirm=true").status_code == 200


def test_counters_never_drop_below_zero(admin_client, catalog, fresh):
    book = catalog.book()
    section = catalog.section(book, lang="hi")
    category = catalog.category(lang="hi")
    quiz = catalog.quiz(category)
    question = catalog.question(quiz)

    db.session.expire_all()
    for row in (
        db.session.get(QuizCategory, category["id"]),
        db.session.get(QuizSection, section["id"]),
        db.session.get(Quiz, quiz["internal_quiz_key"]),
    ):
        row.question_volume = 0
    db.session.commit()

    response = admin_client.delete(f"/admin/questions/{question['question_id']}?confirm=true")
    assert response.status_code == 200
    assert fresh(QuizCategory, category["id"]).question_volume == 0
    assert fresh(QuizSection, section["id"]).question_volume == 0
    assert fresh(Quiz, quiz["internal_quiz_key"]).question_volume == 0
