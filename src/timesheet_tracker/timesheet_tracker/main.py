from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import CONTAINER_KEY, register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_default_admin, list_tables, seed_demo_data
from .database.connection import DBConfig, DatabaseConnection
from .payroll.controller import register as register_payroll
from .timesheets.controller import register as register_timesheets
from .users.controller import register as register_users

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(app: Flask, level_name: str) -> None:
    """Send this package's loggers to stderr at the configured level."""
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO

    package_logger = logging.getLogger(__package__)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    app.logger.setLevel(level)


def _bootstrap_database(app: Flask, settings, db: DatabaseConnection) -> None:
    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db, schema_path=SCHEMA_PATH)
        admin_password = getattr(settings, "DEFAULT_ADMIN_PASSWORD", "")
        if admin_password:
            ensure_default_admin(db, password=admin_password)
        else:
            app.logger.warning("DEFAULT_ADMIN_PASSWORD is empty; no default admin account is created")
        app.logger.info("Schema ready (tables=%d)", len(list_tables(db)))

    if getattr(settings, "AUTO_SEED_DB", False):
        seed_demo_data(db)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory. Pass a container to run over in-memory repositories."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", 1))

    configure_logging(app, getattr(settings, "LOG_LEVEL", "INFO"))
    register_error_handlers(app)

    if container is None:
        db = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))
        app.logger.info("settings=%s db=%s", settings_module, db.config.describe())
        _bootstrap_database(app, settings, db)
        container = build_container(db)

    app.extensions[CONTAINER_KEY] = container
    register_users(app, container)
    register_timesheets(app, container)
    register_payroll(app, container)

    return app
