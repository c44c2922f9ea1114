import re
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import IntegrityError

from swellshare.errors import AppError
from swellshare.extensions import bcrypt, db
from swellshare.models import Profile, User
from swellshare.utils import as_text

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


class AuthService:
    @staticmethod
    def _normalize_email(email):
        return as_text(email).lower()

    @staticmethod
    def _password(value):
        return "" if value is None else str(value)

    @staticmethod
    def register_user(email, password, full_name=None):
        normalized_email = AuthService._normalize_email(email)
        password = AuthService._password(password)
        if not normalized_email or not password:
            raise AppError("Email and password are required.", 400)
        if not EMAIL_PATTERN.match(normalized_email):
            raise AppError("Enter a valid email address.", 400)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AppError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.", 400)

        if User.query.filter_by(email=normalized_email).first():
            raise AppError("Email already registered.", 409)

        admin_emails = current_app.config.get("ADMIN_EMAILS") or []
        user = User(
            email=normalized_email,
            role="admin" if normalized_email in admin_emails else "user",
            password_hash=bcrypt.generate_password_hash(password).decode("utf-8"),
        )
        user.profile = Profile(email=normalized_email, full_name=as_text(full_name) or None)
        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            message = str(getattr(exc, "orig", exc)).lower()
            if "users.email" in message:
                raise AppError("Email already registered.", 409) from exc
            raise AppError("Could not create account due to invalid data.", 400) from exc
        current_app.logger.info("User %s registered", user.id)
        return user

    @staticmethod
    def authenticate_user(email, password):
        user = User.query.filter_by(email=AuthService._normalize_email(email)).first()
        if not user:
            raise AppError("Invalid credentials.", 401)

        try:
            is_valid = bcrypt.check_password_hash(user.password_hash, AuthService._password(password))
        except ValueError:
            is_valid = False

        if not is_valid:
            raise AppError("Invalid credentials.", 401)
        if not user.is_active_user:
            raise AppError("User account is inactive.", 403)
        user.last_login = datetime.now(timezone.utc)
        db.session.commit()
        return user

    @staticmethod
    def session_payload(user):
        """Session summary used by the API and templates; None when signed out."""
        if user is None or not getattr(user, "is_authenticated", False):
            return {"user": None}
        profile = user.profile
        return {
            "user": {
                "id": user.id,
                "email": user.email,
                "role": user.role,
                "full_name": profile.full_name if profile else None,
                "avatar_url": profile.avatar_url if profile else None,
            },
            "last_login": user.last_login.isoformat() if user.last_login else None,
        }
