# backend/chatdesk/__init__.py
from flask import Flask, request, jsonify, json
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .config import Config
from .extensions import db, migrate


def _is_file_sqlite(uri: str) -> bool:
    return uri.startswith("sqlite") and ":memory:" not in uri and uri.rstrip("/") != "sqlite:"


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Wait on a locked SQLite file instead of failing concurrent writers at once
    if _is_file_sqlite(app.config["SQLALCHEMY_DATABASE_URI"]):
        options = app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {})
        options.setdefault("connect_args", {}).setdefault("timeout", app.config["SQLITE_BUSY_TIMEOUT"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.messages import messages_bp
    from .routes.requests import requests_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(messages_bp)
    app.register_blueprint(requests_bp)

    _register_error_handlers(app)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        allowed_origins = app.config["CORS_ALLOWED_ORIGINS"]
        if origin and ("*" in allowed_origins or origin in allowed_origins):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,DELETE,PATCH,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app


def _register_error_handlers(app: Flask) -> None:
    """Every failure leaves the API as {"error": ...} JSON."""

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e):
        db.session.rollback()
        app.logger.exception("Database error on %s %s", request.method, request.path)
        return jsonify({"error": "Database error"}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        # Keep werkzeug's headers (e.g. Allow on 405) but swap the HTML body
        response = e.get_response()
        response.set_data(json.dumps({"error": e.description or e.name}))
        response.content_type = "application/json"
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500
