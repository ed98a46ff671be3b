from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, EngineOptions, build_container
from .core.error_handlers import register_error_handlers
from .database.bootstrap import apply_schema, missing_tables
from .reports.controller import register as register_reports
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "database" / "schema.sql"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory. Pass a prebuilt container to run on other repositories (tests)."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            missing = missing_tables(db_config)
            if missing:
                logger.warning("Schema applied but tables are missing: %s", ", ".join(missing))
        container = build_container(db_config=db_config, options=EngineOptions.from_settings(settings))

    register_error_handlers(app)
    register_attendance(app, container)
    register_reports(app, container)
    register_shifts(app, container)

    logger.info("Shift compliance engine started with settings=%s", settings_module)
    return app
