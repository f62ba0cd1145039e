from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from .common.datetime_utils import now_local
from .common.http import ok
from .config import get_settings_module
from .container import build_container
from .core.constants import MAX_REQUEST_BYTES
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .leave.controller import register as register_leave
from .notifications.controller import register as register_notifications
from .timeline.controller import register as register_timeline

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def register_routes(app: Flask, container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return ok(status="ok", time=now_local().isoformat())

    register_employees(app, container)
    register_leave(app, container)
    register_timeline(app, container)
    register_notifications(app, container)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["MAX_CONTENT_LENGTH"] = MAX_REQUEST_BYTES

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if getattr(settings, "AUTO_SEED_DB", False):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        logger.info("demo seed ready")

    container = build_container(db_config=db_config, settings=settings)
    register_routes(app, container)
    return app
