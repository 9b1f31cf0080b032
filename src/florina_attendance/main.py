from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .attendance.controller import register as register_attendance
from .container import build_container
from .database.bootstrap import apply_schema, ensure_demo_employees, list_tables
from .database.store import Store
from .employees.controller import register as register_employees
from .errors import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(*, store: Optional[Store] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ADMIN_API_KEY"] = getattr(settings, "ADMIN_API_KEY", "")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG")
    if store is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_employees(db_config)
            logger.info("demo employees ready")

    container = build_container(db_config=db_config, store=store, settings=settings)
    app.extensions["florina_container"] = container

    register_error_handlers(app)
    register_employees(app, container)
    register_attendance(app, container)

    return app
