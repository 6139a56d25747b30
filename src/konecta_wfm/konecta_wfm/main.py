from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auxlogs.controller import register as register_aux
from .auxlogs.model import AuxLimits
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .leave.controller import register as register_leave
from .notifications.controller import register as register_notifications
from .schedules.controller import register as register_schedules
from .shift_swaps.controller import register as register_shift_swaps
from .users.controller import register as register_users
from .wallboard.controller import register as register_wallboard

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, NotFoundError):
        return 404
    return 400


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return jsonify({"error": {"message": str(exc)}}), _status_for(exc)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": {"message": exc.description}}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": {"message": "Internal server error"}}), 500


def register_routes(app: Flask, container: Container) -> None:
    register_users(app, container)
    register_attendance(app, container)
    register_aux(app, container)
    register_leave(app, container)
    register_shift_swaps(app, container)
    register_schedules(app, container)
    register_wallboard(app, container)
    register_notifications(app, container)
    _register_error_handlers(app)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            # Users first: seed.sql schedules reference them
            ensure_demo_users(db_config)
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        limits = AuxLimits(
            break_limit_minutes=int(getattr(settings, "BREAK_LIMIT_MINUTES", 15)),
            lunch_limit_minutes=int(getattr(settings, "LUNCH_LIMIT_MINUTES", 60)),
        )
        container = build_container(db_config=db_config, aux_limits=limits)

    register_routes(app, container)
    return app
