import os

from dotenv import load_dotenv
from flask import Flask, flash, jsonify, redirect, request, url_for
from flask_login import user_logged_in, user_logged_out
from flask_wtf.csrf import generate_csrf
from werkzeug.middleware.proxy_fix import ProxyFix

from swellshare.config import config_by_env
from swellshare.errors import register_error_handlers
from swellshare.extensions import bcrypt, cache, csrf, db, limiter, login_manager, migrate
from swellshare.models import User
from swellshare.routes.api.v1 import api_v1_bp
from swellshare.routes.web.admin import web_admin_bp
from swellshare.routes.web.auth import web_auth_bp
from swellshare.routes.web.dashboard import web_dashboard_bp
from swellshare.routes.web.marketplace import web_marketplace_bp
from swellshare.routes.web.receipt import web_receipt_bp
from swellshare.routes.web.rentals import web_rental_bp
from swellshare.services import PlatformService, ProfileService


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


@login_manager.unauthorized_handler
def handle_unauthorized():
    if request.path.startswith("/api/"):
        return jsonify({"error": "Authentication required"}), 401
    flash(login_manager.login_message, login_manager.login_message_category)
    return redirect(url_for(login_manager.login_view, next=request.full_path))


def create_app(env=None):
    load_dotenv()
    env = env or os.getenv("FLASK_ENV", "development")

    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    template_dir = os.path.join(project_root, "templates")
    static_dir = os.path.join(project_root, "static")

    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder=template_dir,
        static_folder=static_dir,
    )
    app.config.from_object(config_by_env.get(env, config_by_env["development"]))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if db_uri.startswith("sqlite:///") and not db_uri.startswith("sqlite:////") and db_uri != "sqlite:///:memory:":
        relative_path = db_uri.replace("sqlite:///", "", 1)
        absolute_path = os.path.join(project_root, relative_path)
        os.makedirs(os.path.dirname(absolute_path), exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{absolute_path}"

    upload_dir = app.config["UPLOAD_DIR"]
    if not os.path.isabs(upload_dir):
        upload_dir = os.path.join(project_root, upload_dir)
    app.config["UPLOAD_DIR"] = upload_dir

    os.makedirs(app.instance_path, exist_ok=True)
    os.makedirs(app.config["UPLOAD_DIR"], exist_ok=True)

    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    csrf.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)
    login_manager.init_app(app)
    _init_sentry(app, env)
    _register_auth_listeners(app)

    register_error_handlers(app)

    app.register_blueprint(web_auth_bp)
    app.register_blueprint(web_marketplace_bp)
    app.register_blueprint(web_dashboard_bp)
    app.register_blueprint(web_rental_bp)
    app.register_blueprint(web_receipt_bp)
    app.register_blueprint(web_admin_bp)
    app.register_blueprint(api_v1_bp, url_prefix="/api/v1")

    if env in {"development", "testing"}:
        with app.app_context():
            db.create_all()

    @app.context_processor
    def inject_globals():
        return {
            "csrf_token": generate_csrf,
            "message_poll_interval": app.config["MESSAGE_POLL_INTERVAL_SECONDS"],
            "current_fees": PlatformService.fee_settings,
        }

    return app


def _register_auth_listeners(app):
    """Auth-state changes: create the profile on first sign-in, log sign-outs."""

    def on_signed_in(sender, user, **_extra):
        ProfileService.ensure_profile(user)
        sender.logger.info("User %s signed in", user.id)

    def on_signed_out(sender, user, **_extra):
        if user is not None and getattr(user, "is_authenticated", False):
            sender.logger.info("User %s signed out", user.id)

    user_logged_in.connect(on_signed_in, app, weak=False)
    user_logged_out.connect(on_signed_out, app, weak=False)


def _init_sentry(app, env):
    dsn = app.config.get("SENTRY_DSN")
    if not dsn:
        return
    try:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.05")),
            environment=env,
        )
        app.logger.info("Sentry initialized.")
    except Exception as exc:
        app.logger.warning("Sentry initialization failed: %s", exc)
