"""moodlog application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify

from moodlog.config import config_by_name
from moodlog.core.ai.client import GeminiClient
from moodlog.extensions import init_extensions, jwt


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the moodlog Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI")
    if db_uri and db_uri.startswith("sqlite:///"):
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    # One model client per process, shared by annotation and semantic search.
    app.extensions["model_client"] = GeminiClient.from_config(app.config)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from moodlog.scripts.seed_demo import register_commands

    register_commands(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from moodlog.core.auth.controllers import auth_bp  # local import to avoid circulars
    from moodlog.domains.journal.controllers.ai_api import ai_api_bp
    from moodlog.domains.journal.controllers.journal_api import journal_api_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(journal_api_bp, url_prefix="/api/entries")
    app.register_blueprint(ai_api_bp, url_prefix="/api/ai")


def _register_error_handlers(app: Flask) -> None:
    """JSON error responses for domain, HTTP, and unexpected errors."""
    from werkzeug.exceptions import HTTPException

    from moodlog.core.errors import MoodlogError

    @app.errorhandler(MoodlogError)
    def _domain_error(exc: MoodlogError):
        return {"ok": False, "error": exc.code, "message": exc.public_message}, exc.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """Render token failures in the same JSON shape as other errors."""

    def _unauthorized(reason: str):
        return jsonify({"ok": False, "error": "unauthorized", "message": reason}), 401

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _unauthorized(reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _unauthorized(reason)

    @jwt.expired_token_loader
    def _expired_token(_header, _payload):
        return _unauthorized("token_expired")
