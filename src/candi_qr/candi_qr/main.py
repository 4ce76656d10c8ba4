from __future__ import annotations

import atexit
import importlib
import logging
import traceback
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask, jsonify
from flask.logging import default_handler
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .common.datetime_utils import now_local
from .common.json_provider import CandiJSONProvider
from .common.responses import fail
from .container import Container, build_container
from .core.constants import DEFAULT_COOKIE_DAYS, DEFAULT_RATE_LIMIT, DEFAULT_TOKEN_HOURS
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables, upsert_admin
from .auth.guards import install_request_guard
from .locations.controller import register as register_locations
from .operators.controller import register as register_operators
from .parents.controller import register as register_parents
from .reports.controller import register as register_reports
from .schedules.controller import register as register_schedules
from .settings.controller import register as register_settings
from .students.controller import register as register_students
from .subjects.controller import register as register_subjects
from .teachers.controller import register as register_teachers
from .users.controller import register as register_users
from .web.controller import register as register_web

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
RATE_LIMITED_MESSAGE = "Terlalu banyak request dari IP ini, coba lagi dalam 15 menit"

_SETTING_NAMES = (
    "SECRET_KEY",
    "DB_CONFIG",
    "JWT_SECRET",
    "JWT_EXPIRES_HOURS",
    "TOKEN_COOKIE_DAYS",
    "FRONTEND_URL",
    "PORT",
    "ENVIRONMENT",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "RATE_LIMIT",
    "RATELIMIT_ENABLED",
    "AUTO_INIT_DB",
)


def _load_settings(settings_module: str, overrides: Optional[dict]) -> dict:
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in _SETTING_NAMES if hasattr(settings, name)}
    values.update(overrides or {})
    return values


def _configure_logging(app: Flask, level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    app.logger.setLevel(level)
    package_logger = logging.getLogger(__package__)
    package_logger.setLevel(level)
    if not package_logger.handlers:
        package_logger.addHandler(default_handler)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return fail(str(e), e.http_status, reason=e.reason)

    @app.errorhandler(404)
    def _not_found(_e):
        return fail("Endpoint tidak ditemukan", 404)

    @app.errorhandler(429)
    def _rate_limited(_e):
        return fail(RATE_LIMITED_MESSAGE, 429)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        app.logger.exception("Unhandled error: %s", e)
        if app.config.get("DEBUG"):
            return fail("Terjadi kesalahan server", 500, error=str(e), trace=traceback.format_exc())
        return fail("Terjadi kesalahan server", 500)


def _register_cli(app: Flask, db_config: dict) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Apply database/schema.sql."""
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        click.echo(f"Schema ready (tables={len(list_tables(db_config))})")

    @app.cli.command("create-admin")
    @click.option("--username", default="admin", show_default=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--full-name", default="Administrator", show_default=True)
    @click.option("--email", default=None)
    def create_admin(username: str, password: str, full_name: str, email: Optional[str]):
        """Create the admin account or reset its password."""
        upsert_admin(db_config, username=username, password=password, full_name=full_name, email=email)
        click.echo(f"Admin '{username}' ready")


def create_app(
    container: Optional[Container] = None,
    *,
    settings_module: Optional[str] = None,
    config_overrides: Optional[dict] = None,
) -> Flask:
    """Build the Flask app.

    Tests pass their own container (in-memory repositories) and skip the
    database entirely.
    """
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = settings_module or get_settings_module()
    conf = _load_settings(settings_module, config_overrides)
    db_config = dict(conf.get("DB_CONFIG") or {})

    app.secret_key = conf["SECRET_KEY"]
    app.config["DEBUG"] = bool(conf.get("DEBUG", False))
    app.config["TESTING"] = bool(conf.get("TESTING", False))
    app.config["ENVIRONMENT"] = conf.get("ENVIRONMENT", "development")
    app.config["PORT"] = int(conf.get("PORT", 5000))
    app.config["TOKEN_COOKIE_DAYS"] = int(conf.get("TOKEN_COOKIE_DAYS", DEFAULT_COOKIE_DAYS))
    app.config["RATELIMIT_ENABLED"] = bool(conf.get("RATELIMIT_ENABLED", True))
    app.json_provider_class = CandiJSONProvider
    app.json = CandiJSONProvider(app)

    _configure_logging(app, conf.get("LOG_LEVEL", "INFO"))
    app.logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if conf.get("AUTO_INIT_DB"):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            app.logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(
            db_config=db_config,
            jwt_secret=conf["JWT_SECRET"],
            jwt_expires_hours=int(conf.get("JWT_EXPIRES_HOURS", DEFAULT_TOKEN_HOURS)),
        )
        if container.conn is not None:
            atexit.register(container.conn.dispose)
    app.extensions["candi_qr"] = container

    CORS(app, origins=[conf.get("FRONTEND_URL", "*")], supports_credentials=True)
    Limiter(
        get_remote_address,
        app=app,
        default_limits=[conf.get("RATE_LIMIT", DEFAULT_RATE_LIMIT)],
        storage_uri="memory://",
    )
    install_request_guard(app, container.auth_service)
    _register_error_handlers(app)
    _register_cli(app, db_config)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "success": True,
                "message": "Server berjalan dengan baik",
                "timestamp": now_local().isoformat(),
                "environment": app.config["ENVIRONMENT"],
            }
        )

    register_users(app, container)
    register_students(app, container)
    register_teachers(app, container)
    register_parents(app, container)
    register_operators(app, container)
    register_classes(app, container)
    register_subjects(app, container)
    register_schedules(app, container)
    register_attendance(app, container)
    register_locations(app, container)
    register_settings(app, container)
    register_reports(app, container)
    register_web(app, container)

    return app
