from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.web import domain_error_response, fail
from .container import build_container, build_store
from .core.constants import CANVAS_HEIGHT, CANVAS_WIDTH, DEFAULT_SESSION_DAYS
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables, seed_defaults

from .app_links.controller import register as register_app_links
from .attendance.controller import register as register_attendance
from .dashboard.controller import register as register_dashboard
from .materials.controller import register as register_materials
from .notes.controller import register as register_notes
from .notices.controller import register as register_notices
from .shifts.controller import register as register_shifts
from .users.controller import register as register_users

SCHEMA_PATH = Path(__file__).resolve().parent / "database" / "schema.sql"

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "STORAGE_BACKEND",
    "DATA_DIR",
    "DB_CONFIG",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "LOG_FILE",
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
    "SESSION_DAYS",
)


def load_settings(overrides: Optional[Mapping] = None) -> dict:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in SETTING_NAMES if hasattr(module, name)}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def configure_logging(app: Flask, log_file: Optional[str]) -> None:
    if app.debug or app.testing or not log_file:
        return

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    handler.setLevel(logging.INFO)

    # Service modules log under the package logger; send them to the same file.
    for logger in (app.logger, logging.getLogger(__package__)):
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    app.logger.info("Invention Station startup")


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(DomainError, domain_error_response)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return fail(exc.description or exc.name, exc.code or 500)
        app.logger.exception("Unhandled error: %s", exc)
        return fail("システムエラーが発生しました", 500)


def create_app(overrides: Optional[Mapping] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = load_settings(overrides)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.json.ensure_ascii = False
    app.permanent_session_lifetime = timedelta(days=int(settings.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    configure_logging(app, settings.get("LOG_FILE"))

    backend = str(settings.get("STORAGE_BACKEND", "file")).lower()
    db_config = settings.get("DB_CONFIG") or {}
    if app.config["DEBUG"]:
        target = settings.get("DATA_DIR") if backend == "file" else (
            f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
        )
        app.logger.info("[invention-station] settings=%s storage=%s (%s)", settings["SETTINGS_MODULE"], backend, target)

    if backend == "mysql" and settings.get("AUTO_INIT_DB"):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        app.logger.info("[invention-station] schema ready (tables=%d)", len(list_tables(db_config)))

    store = build_store(backend=backend, data_dir=settings.get("DATA_DIR"), db_config=db_config)
    if settings.get("AUTO_SEED_DB"):
        seed_defaults(store)

    container = build_container(
        store,
        canvas_width=int(settings.get("CANVAS_WIDTH", CANVAS_WIDTH)),
        canvas_height=int(settings.get("CANVAS_HEIGHT", CANVAS_HEIGHT)),
    )
    app.extensions["invention_station"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_dashboard(app, container)
    register_materials(app, container)
    register_shifts(app, container)
    register_notices(app, container)
    register_app_links(app, container)
    register_notes(app, container)
    register_attendance(app, container)

    return app
