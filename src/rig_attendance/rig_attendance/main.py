from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .common.logging_config import configure_logging
from .core.constants import DEFAULT_EXPORT_TIMEOUT_SECONDS, DESIGNATION_RANKS, UNRANKED_DESIGNATION
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_defaults, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .export.controller import register as register_export
from .settings.controller import register as register_settings
from .workspaces.controller import register as register_workspaces

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    When `container` is given (tests), database bootstrap is skipped entirely.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

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
            apply_schema(db_config, schema_path=PROJECT_ROOT / "database" / "schema.sql")
            ensure_defaults(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=PROJECT_ROOT / "database" / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            export_timeout_seconds=float(getattr(settings, "EXPORT_TIMEOUT_SECONDS", DEFAULT_EXPORT_TIMEOUT_SECONDS)),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            changed = container.employees_repo.refresh_designation_orders(
                DESIGNATION_RANKS, default_rank=UNRANKED_DESIGNATION
            )
            if changed:
                logger.info("Re-ranked %d employee(s) by designation", changed)

    register_error_handlers(app)
    register_workspaces(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_export(app, container)
    register_settings(app, container)

    return app
