from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from swellshare.routes.api.v1.serializers import profile_to_dict
from swellshare.services import ProfileService

api_profile_bp = Blueprint("api_profile", __name__)


@api_profile_bp.get("/me")
@login_required
def my_profile():
    profile, _ = ProfileService.ensure_profile(current_user)
    return jsonify(profile_to_dict(profile))


@api_profile_bp.patch("/me")
@login_required
def update_my_profile():
    payload = request.get_json(silent=True) or {}
    profile = ProfileService.update_profile(current_user, payload)
    return jsonify(profile_to_dict(profile))
