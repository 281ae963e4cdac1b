from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .roster.controller import register as register_roster

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
        logger.info("settings=%s store=%s write_mode=%s", settings_module, backend, getattr(settings, "LEDGER_WRITE_MODE", "atomic"))

        if backend == "mysql":
            db_config = getattr(settings, "DB_CONFIG")
            if getattr(settings, "AUTO_INIT_DB", False):
                apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
                logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
            if getattr(settings, "AUTO_SEED_DB", False):
                apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
                logger.info("demo seed ready")

        container = build_container(settings=settings)

    app.extensions["attendance_ledger"] = container

    register_roster(app, container)
    register_attendance(app, container)

    return app
