"""Admin accounts and player profile management."""

from typing import Any, Dict, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from extensions import db
from forms import LoginForm
from models import AdminUser, UserProfile
from services.base_service import BaseService

NOT_AUTHORIZED = "You are not authorized to access this page"


class UserService(BaseService):
    """Encapsulates dashboard authentication and the player profile list."""

    MIN_PASSWORD_LENGTH = 6

    # --------------------------------------------------------------------- #
    # Admin accounts
    # --------------------------------------------------------------------- #

    def create_admin(self, email: str, password: str, is_admin: bool = True) -> Dict[str, Any]:
        """Create (or promote) a dashboard account."""
        email = (email or "").strip().lower()
        if not email:
            return self._failure("Email is required.")
        if not password or len(password) < self.MIN_PASSWORD_LENGTH:
            return self._failure(
                f"Password must be at least {self.MIN_PASSWORD_LENGTH} characters."
            )

        account = AdminUser.query.filter_by(email=email).first()
        try:
            if account is None:
                account = AdminUser(email=email)
                db.session.add(account)
            account.password_hash = generate_password_hash(password)
            account.is_admin = is_admin
            db.session.commit()
        except SQLAlchemyError as exc:
            current_app.logger.exception("Failed to create admin account: %s", exc)
            db.session.rollback()
            return self._failure("Unable to create account.", 500)
        return {"success": True, "account": account}

    def authenticate(self, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Validate login credentials.

        Unknown accounts and wrong passwords get the same answer; a valid
        account without the admin flag is refused with a 403.
        """
        form, failure = self._validate(LoginForm, payload)
        if failure:
            return failure

        account = AdminUser.query.filter_by(email=str(form.email).lower()).first()
        if account is None or not check_password_hash(account.password_hash, form.password):
            return self._failure("Invalid email or password", 401)
        if not account.is_admin:
            current_app.logger.warning("Non-admin login refused for %s", account.email)
            return self._failure(NOT_AUTHORIZED, 403)
        return {"success": True, "account": account}

    def get_account(self, account_id: int) -> Optional[AdminUser]:
        return db.session.get(AdminUser, account_id)

    # --------------------------------------------------------------------- #
    # Player profiles
    # --------------------------------------------------------------------- #

    def list_profiles(self, search: str = "") -> Dict[str, Any]:
        """Profiles newest first, filtered on a case-insensitive name match."""
        query = UserProfile.query
        search = (search or "").strip()
        if search:
            query = query.filter(UserProfile.name.ilike(f"%{search}%"))
        profiles = query.order_by(UserProfile.updated_at.desc()).all()
        return {"success": True, "users": profiles, "search": search}

    def delete_profile(self, profile_id: str) -> Dict[str, Any]:
        profile = self._locked(UserProfile, id=profile_id)
        if profile is None:
            return self._not_found("User")
        return self._guarded_delete(profile, "User")
