"""Admin Service Module

Dashboard overview figures for the admin home page.
"""

from typing import Any, Dict

from flask import current_app

from extensions import cache, db
from models import (
    ExamBook,
    Question,
    QuestionReport,
    Quiz,
    QuizCategory,
    QuizSection,
    UserProfile,
    UserProgress,
)
from services.base_service import DASHBOARD_STATS_CACHE_KEY

STAT_MODELS = {
    "exam_books": ExamBook,
    "sections": QuizSection,
    "categories": QuizCategory,
    "quizzes": Quiz,
    "questions": Question,
    "users": UserProfile,
    "reports": QuestionReport,
    "leaderboard": UserProgress,
}


def format_count(value: int) -> str:
    """Thousands-separated display form: 1234567 -> "1,234,567"."""
    return f"{value:,}"


class AdminService:
    """Service class for the dashboard overview."""

    def get_dashboard_stats(self) -> Dict[str, Any]:
        """Row counts of every managed table, cached between writes."""
        cached = cache.get(DASHBOARD_STATS_CACHE_KEY)
        if cached is not None:
            return cached

        stats = {}
        for name, model in STAT_MODELS.items():
            stats[name] = db.session.query(db.func.count()).select_from(model).scalar() or 0

        payload = {
            "stats": stats,
            "display": {name: format_count(value) for name, value in stats.items()},
        }
        cache.set(
            DASHBOARD_STATS_CACHE_KEY,
            payload,
            timeout=current_app.config.get("CACHE_DEFAULT_TIMEOUT"),
        )
        return payload
