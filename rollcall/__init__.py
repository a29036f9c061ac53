"""Rollcall application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, g
from werkzeug.exceptions import HTTPException

from rollcall.config import config_by_name
from rollcall.core.errors import AppError, ServerError
from rollcall.core.events.event_bus import event_bus
from rollcall.core.utils.request_logging import register_request_logging
from rollcall.core.utils.responses import failure
from rollcall.extensions import init_extensions

logger = logging.getLogger(__name__)


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Rollcall Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(__name__, instance_path=str(instance_root), instance_relative_config=True)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    instance_root.mkdir(parents=True, exist_ok=True)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///") and not db_uri.startswith("sqlite:////"):
        db_path = db_uri.replace("sqlite:///", "", 1)
        if db_path and db_path != ":memory:":
            abs_path = project_root / db_path
            abs_path.parent.mkdir(parents=True, exist_ok=True)
            app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{abs_path}"

    _configure_logging(app)
    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    register_request_logging(app)

    # Key loaders for access tokens are attached on import.
    from rollcall.core.auth import tokens  # noqa: F401
    from rollcall.core.events.event_service import register_subscriptions

    register_subscriptions()
    app.extensions["event_bus"] = event_bus

    @app.get("/health")
    def health():
        return {"success": True, "status": "ok"}, 200

    from rollcall.scripts.seed_demo import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    logging.getLogger("rollcall").setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from rollcall.core.auth.controllers import auth_bp  # local import to avoid circulars
    from rollcall.core.users.controllers import user_api_bp
    from rollcall.domains.alerts.controllers.alert_api import alert_api_bp
    from rollcall.domains.areas.controllers.area_api import area_api_bp
    from rollcall.domains.dashboard.controllers.dashboard_api import dashboard_api_bp
    from rollcall.domains.responses.controllers.response_api import response_api_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(user_api_bp, url_prefix="/api/users")
    app.register_blueprint(area_api_bp, url_prefix="/api/areas")
    app.register_blueprint(alert_api_bp, url_prefix="/api/alerts")
    app.register_blueprint(response_api_bp, url_prefix="/api/responses")
    app.register_blueprint(dashboard_api_bp, url_prefix="/api/dashboard")


def _register_error_handlers(app: Flask) -> None:
    """Render every error through the failure envelope."""

    def _respond(error: AppError):
        g.error_message = error.message
        if error.status >= 500:
            app.logger.error(
                "http.error.response status=%s message=%s req_id=%s",
                error.status,
                error.message,
                g.get("request_id") or "-",
            )
        return failure(error)

    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        return _respond(exc)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        error = AppError("Not found" if exc.code == 404 else exc.name)
        error.status = exc.code or 500
        return _respond(error)

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        # Details stay in the log; driver messages can carry SQL and bound values.
        app.logger.exception("Unhandled error: %s", exc)
        return _respond(ServerError())
