from flask import current_app

from swellshare.errors import AppError
from swellshare.extensions import db
from swellshare.models import Profile
from swellshare.utils import as_text

EDITABLE_FIELDS = ("full_name", "avatar_url", "phone", "bio", "location")
FIELD_LIMITS = {
    "full_name": 120,
    "avatar_url": 500,
    "phone": 32,
    "bio": 2000,
    "location": 160,
}


class ProfileService:
    @staticmethod
    def get_profile(user_id):
        return db.session.get(Profile, user_id)

    @staticmethod
    def ensure_profile(user):
        """Create the profile row on first sign-in when it is missing."""
        profile = db.session.get(Profile, user.id)
        if profile:
            return profile, False
        profile = Profile(id=user.id, email=user.email)
        db.session.add(profile)
        db.session.commit()
        current_app.logger.info("Created missing profile for user %s", user.id)
        return profile, True

    @staticmethod
    def update_profile(user, payload):
        profile, _ = ProfileService.ensure_profile(user)
        for field in EDITABLE_FIELDS:
            if field not in payload:
                continue
            value = as_text(payload.get(field))
            if len(value) > FIELD_LIMITS[field]:
                raise AppError(f"{field.replace('_', ' ').capitalize()} is too long.", 400)
            setattr(profile, field, value or None)
        db.session.commit()
        return profile
