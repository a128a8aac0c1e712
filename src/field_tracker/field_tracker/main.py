from __future__ import annotations

import importlib
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from . import __version__
from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers, success
from .container import Container, build_container
from .core.constants import DEFAULT_DB_TIMEOUT_SECONDS
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .locations.controller import register as register_locations

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _register_system_routes(app: Flask) -> None:
    started = time.monotonic()

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return success(
            {
                "message": "Field Tracker API is running!",
                "version": __version__,
                "timestamp": datetime.now().isoformat(),
            }
        )

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return success({"status": "healthy", "uptime_seconds": round(time.monotonic() - started, 1)})


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    ``container`` lets tests (or other hosts) inject their own repositories;
    when omitted, a MySQL-backed container is built from settings.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

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
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            timeout_seconds=int(getattr(settings, "DB_TIMEOUT_SECONDS", DEFAULT_DB_TIMEOUT_SECONDS)),
        )

    register_error_handlers(app)
    _register_system_routes(app)
    register_employees(app, container)
    register_attendance(app, container)
    register_locations(app, container)

    return app
