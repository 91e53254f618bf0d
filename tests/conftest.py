"""Shared fixtures: an app bound to an in-memory database per test."""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app  # noqa: E402
from extensions import cache, db  # noqa: E402

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "CACHE_TYPE": "SimpleCache",
    "CACHE_DEFAULT_TIMEOUT": 300,
}


@pytest.fixture()
def app():
    application = create_app(TEST_CONFIG)
    with application.app_context():
        db.create_all()
        cache.clear()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def admin_client(client):
    with client.session_transaction() as sess:
        sess["admin_id"] = 1
        sess["email"] = "admin@example.com"
        sess["is_admin"] = True
    return client


def _fresh(model, pk):
    db.session.expire_all()
    return db.session.get(model, pk)


@pytest.fixture()
def fresh():
    """Reload a row, dropping whatever the session has cached."""
    return _fresh


class CatalogBuilder:
    """Creates the book → section → category → quiz → question chain over HTTP."""

    def __init__(self, client):
        self.client = client

    def _post(self, url, data):
        response = self.client.post(url, json=data)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    def book(self, **overrides):
        data = {
            "title": "SSC CGL",
            "subtitle": "Tier I",
            "icon": "https://cdn.example.com/ssc.png",
            "order": 1,
        }
        data.update(overrides)
        return self._post("/admin/books", data)["book"]

    def section(self, book, lang="hi", **overrides):
        data = {"module_code": "MATH", "module_title": "Mathematics"}
        data.update(overrides)
        return self._post(f"/admin/books/{book['book_id']}/sections?lang={lang}", data)[
            "section"
        ]

    def category(self, module_code="MATH", lang="hi", **overrides):
        data = {"segment_title": "Algebra"}
        data.update(overrides)
        return self._post(f"/admin/sections/{module_code}/categories?lang={lang}", data)[
            "category"
        ]

    def quiz(self, category, **overrides):
        data = {"quiz_title": "Set 1", "language_code": category["language_code"]}
        data.update(overrides)
        return self._post(f"/admin/categories/{category['segment_code']}/quizzes", data)[
            "quiz"
        ]

    def question(self, quiz, **overrides):
        data = {
            "question_type": 1,
            "question_text": "<p>2 + 2 = ?</p>",
            "option_a": "3",
            "option_b": "4",
            "option_c": "5",
            "option_d": "6",
            "correct_answer": "b",
            "language_code": "en",
        }
        data.update(overrides)
        return self._post(f"/admin/quizzes/{quiz['internal_quiz_key']}/questions", data)[
            "question"
        ]


@pytest.fixture()
def catalog(admin_client):
    return CatalogBuilder(admin_client)
