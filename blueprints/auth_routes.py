"""Authentication routes for the admin dashboard."""

from flask import Blueprint, current_app, jsonify, session

from blueprints.helpers import payload
from services import get_user_service

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate an admin and open a session."""
    session.clear()
    result = get_user_service().authenticate(payload())

    if not result.get("success"):
        body = {key: value for key, value in result.items() if key != "status"}
        return jsonify(body), result.get("status", 400)

    account = result["account"]
    session["admin_id"] = account.id
    session["email"] = account.email
    session["is_admin"] = bool(account.is_admin)
    session.permanent = True
    current_app.logger.info("Admin %s signed in", account.email)
    return jsonify({"success": True, "user": {"id": account.id, "email": account.email}})


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Log the current admin out."""
    session.clear()
    return jsonify({"success": True, "message": "Logged out successfully."})


@auth_bp.route("/me")
def me():
    """Return the signed-in admin, if any."""
    account_id = session.get("admin_id")
    account = get_user_service().get_account(account_id) if account_id else None
    if account is None or not account.is_admin:
        session.clear()
        return jsonify({"success": False, "error": "Authentication required."}), 401
    return jsonify(
        {"success": True, "user": {"id": account.id, "email": account.email}}
    )
