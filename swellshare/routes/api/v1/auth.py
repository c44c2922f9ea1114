from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from swellshare.extensions import limiter
from swellshare.services import AuthService

api_auth_bp = Blueprint("api_auth", __name__)


@api_auth_bp.post("/register")
@limiter.limit("15 per minute")
def api_register():
    payload = request.get_json(silent=True) or {}
    user = AuthService.register_user(
        email=payload.get("email", ""),
        password=payload.get("password", ""),
        full_name=payload.get("full_name"),
    )
    login_user(user)
    return jsonify(AuthService.session_payload(user)), 201


@api_auth_bp.post("/login")
@limiter.limit("20 per minute")
def api_login():
    payload = request.get_json(silent=True) or {}
    user = AuthService.authenticate_user(payload.get("email", ""), payload.get("password", ""))
    login_user(user, remember=bool(payload.get("remember")))
    return jsonify(AuthService.session_payload(user))


@api_auth_bp.get("/session")
def api_session():
    return jsonify(AuthService.session_payload(current_user))


@api_auth_bp.post("/logout")
@login_required
def api_logout():
    logout_user()
    return jsonify({"ok": True})
