from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from swellshare.errors import AppError
from swellshare.extensions import limiter
from swellshare.services import AuthService, ProfileService
from swellshare.utils import is_safe_redirect

web_auth_bp = Blueprint("web_auth", __name__)


def _safe_next(default_endpoint="web_dashboard.dashboard"):
    target = (request.values.get("next") or "").strip()
    if is_safe_redirect(target):
        return target
    return url_for(default_endpoint)


@web_auth_bp.route("/register", methods=["GET", "POST"])
@limiter.limit("15 per minute")
def register():
    if current_user.is_authenticated:
        return redirect(url_for("web_dashboard.dashboard"))

    if request.method == "GET":
        return render_template("register.html")

    try:
        user = AuthService.register_user(
            email=request.form.get("email", ""),
            password=request.form.get("password", ""),
            full_name=request.form.get("full_name"),
        )
        login_user(user)
        flash("Account created. Welcome to SwellShare.", "success")
        return redirect(url_for("web_dashboard.dashboard"))
    except AppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("web_auth.register"))


@web_auth_bp.route("/login", methods=["GET", "POST"])
@limiter.limit("20 per minute")
def login():
    if current_user.is_authenticated:
        return redirect(url_for("web_dashboard.dashboard"))

    if request.method == "GET":
        return render_template("login.html", next=request.args.get("next", ""))

    try:
        user = AuthService.authenticate_user(
            email=request.form.get("email", ""),
            password=request.form.get("password", ""),
        )
        login_user(user, remember=request.form.get("remember") == "on")
        flash("Welcome back.", "success")
        return redirect(_safe_next())
    except AppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("web_auth.login"))


@web_auth_bp.get("/logout")
@login_required
def logout():
    logout_user()
    flash("Signed out.", "success")
    return redirect(url_for("web_marketplace.index"))


@web_auth_bp.route("/profile", methods=["GET", "POST"])
@login_required
def profile():
    if request.method == "GET":
        profile_row, _ = ProfileService.ensure_profile(current_user)
        return render_template("profile.html", profile=profile_row)

    try:
        ProfileService.update_profile(current_user, request.form.to_dict())
        flash("Your profile has been updated.", "success")
    except AppError as exc:
        flash(exc.message, "error")
    return redirect(url_for("web_auth.profile"))
