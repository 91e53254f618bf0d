"""Request/response plumbing shared by the admin blueprints."""

from typing import Any, Callable, Dict, Optional

from flask import jsonify, request, session

TRUTHY = {"1", "true", "yes", "on"}


def require_admin():
    """``before_request`` hook restricting a blueprint to admin sessions."""
    if not session.get("admin_id"):
        return jsonify({"success": False, "error": "Authentication required."}), 401
    if not session.get("is_admin"):
        return (
            jsonify(
                {"success": False, "error": "You are not authorized to access this page"}
            ),
            403,
        )
    return None


def payload() -> Dict[str, Any]:
    """JSON body, falling back to submitted form fields."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    return data if isinstance(data, dict) else {}


def request_language(default: Optional[str] = None) -> Optional[str]:
    return request.args.get("lang") or request.args.get("language") or default


def is_confirmed() -> bool:
    if (request.args.get("confirm") or "").lower() in TRUTHY:
        return True
    body = request.get_json(silent=True)
    return isinstance(body, dict) and body.get("confirm") is True


def confirmation_prompt(noun: str):
    """Answer for a delete that has not been confirmed yet, or ``None``."""
    if is_confirmed():
        return None
    return (
        jsonify(
            {
                "success": False,
                "confirmation_required": True,
                "error": "Confirmation required",
                "message": (
                    f"Are you sure you want to delete this {noun}? "
                    "This action cannot be undone."
                ),
            }
        ),
        400,
    )


def respond(
    result: Dict[str, Any],
    success_status: int = 200,
    **serializers: Callable[[Any], Dict[str, Any]],
):
    """Turn a service result into a JSON response.

    ``serializers`` maps result keys to the function that renders the row
    (or each row of a list) stored under that key.
    """
    body = dict(result)
    status = body.pop("status", None)
    for key, serializer in serializers.items():
        value = body.get(key)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            body[key] = [serializer(item) for item in value]
        else:
            body[key] = serializer(value)
    if status is None:
        status = success_status if body.get("success") else 400
    return jsonify(body), status
