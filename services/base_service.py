"""Helpers shared by the content services."""

from typing import Any, Callable, Dict, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import cache, db
from forms import parse_form
from services.guards import DeletionBlocked

DASHBOARD_STATS_CACHE_KEY = "admin:dashboard_stats"


def invalidate_dashboard_stats() -> None:
    cache.delete(DASHBOARD_STATS_CACHE_KEY)


class BaseService:
    """Result-dict conventions used by every admin service.

    Methods return ``{"success": True, ...}`` or
    ``{"success": False, "error": ..., "status": <http status>}``.
    """

    @staticmethod
    def _failure(error: str, status: int = 400, **extra: Any) -> Dict[str, Any]:
        result = {"success": False, "error": error, "status": status}
        result.update(extra)
        return result

    def _not_found(self, label: str) -> Dict[str, Any]:
        return self._failure(f"{label} not found", 404)

    def _validate(self, form_cls, payload: Optional[Dict[str, Any]]):
        """Return ``(form, None)`` or ``(None, failure_result)``."""
        form, errors = parse_form(form_cls, payload)
        if errors:
            return None, self._failure("Validation failed", 400, errors=errors)
        return form, None

    def _commit(self, action: str) -> Optional[Dict[str, Any]]:
        """Commit the session; on failure roll back and return a failure result."""
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.exception("Failed to %s: %s", action, exc)
            return self._failure(f"Failed to {action}: {exc.__class__.__name__}", 500)
        invalidate_dashboard_stats()
        return None

    @staticmethod
    def _apply(row, values: Dict[str, Any], exclude=()) -> None:
        for key, value in values.items():
            if key in exclude:
                continue
            setattr(row, key, value)

    @staticmethod
    def _locked(model, **filters):
        """Load one row for update so the guard sees current counters."""
        stmt = db.select(model).filter_by(**filters).with_for_update()
        return db.session.execute(stmt).scalar_one_or_none()

    def _guarded_delete(
        self,
        row,
        label: str,
        guard: Optional[Callable[[Any], None]] = None,
        before: Optional[Callable[[Any], None]] = None,
    ) -> Dict[str, Any]:
        """Run ``guard``, then ``before`` and delete ``row`` in one transaction."""
        if guard is not None:
            try:
                guard(row)
            except DeletionBlocked as blocked:
                db.session.rollback()
                current_app.logger.info("Delete blocked: %s", blocked.message)
                result = blocked.to_dict()
                result["status"] = 409
                return result

        if before is not None:
            before(row)
        db.session.delete(row)
        failure = self._commit(f"delete {label.lower()}")
        if failure:
            return failure
        return {"success": True, "message": f"{label} deleted"}
