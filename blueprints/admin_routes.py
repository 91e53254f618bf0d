"""Admin Routes Blueprint

Dashboard overview, player profiles and question reports.
"""

from flask import Blueprint, jsonify, request, url_for

from blueprints.helpers import confirmation_prompt, payload, require_admin, respond
from services import get_admin_service, get_question_service, get_user_service
from utils.pagination import parse_page

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")
admin_bp.before_request(require_admin)


# ============================================================================
# DASHBOARD
# ============================================================================


@admin_bp.route("/")
@admin_bp.route("")
def admin_dashboard():
    """Admin dashboard overview."""
    overview = get_admin_service().get_dashboard_stats()
    return jsonify(
        {
            "success": True,
            "stats": overview["stats"],
            "display": overview["display"],
            "links": {
                "exam_books": url_for("catalog.list_books"),
                "users": url_for("admin.list_users"),
                "question_reports": url_for("admin.list_reports"),
                "gk_subjects": url_for("gk.list_subjects"),
            },
        }
    )


# ============================================================================
# USERS
# ============================================================================


@admin_bp.route("/users", methods=["GET"])
def list_users():
    result = get_user_service().list_profiles(request.args.get("search", ""))
    return respond(result, users=lambda profile: profile.to_dict())


@admin_bp.route("/users/<profile_id>", methods=["DELETE"])
def delete_user(profile_id: str):
    prompt = confirmation_prompt("user")
    if prompt:
        return prompt
    return respond(get_user_service().delete_profile(profile_id))


# ============================================================================
# QUESTION REPORTS
# ============================================================================


def _report_row(report):
    row = report.to_dict()
    row["question_url"] = url_for(
        "admin.get_reported_question", question_id=report.question_id
    )
    return row


@admin_bp.route("/question-reports", methods=["GET"])
def list_reports():
    result = get_question_service().list_reports(parse_page(request.args.get("page")))
    return respond(result, reports=_report_row)


@admin_bp.route("/question-reports/<question_id>/question", methods=["GET"])
def get_reported_question(question_id: str):
    result = get_question_service().get_reported_question(question_id)
    return respond(result, question=lambda question: question.to_dict())


@admin_bp.route("/question-reports/<question_id>/question", methods=["PUT"])
def update_reported_question(question_id: str):
    result = get_question_service().update_question(question_id, payload())
    return respond(result, question=lambda question: question.to_dict())


@admin_bp.route("/question-reports/<question_id>/resolve", methods=["POST"])
def resolve_reports(question_id: str):
    return respond(get_question_service().resolve_reports(question_id))
