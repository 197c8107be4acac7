from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import register_error_handlers
from .core.enums import StoreBackend
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables

from .container import build_container
from .attendance.controller import register as register_attendance
from .broadcasts.controller import register as register_broadcasts
from .payroll.controller import register as register_payroll
from .projects.controller import register as register_projects
from .shifts.controller import register as register_shifts
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(settings_module: str | None = None, **overrides) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    def setting(name, default=None):
        return overrides.get(name, getattr(settings, name, default))

    logging.basicConfig(level=str(setting("LOG_LEVEL", "INFO")).upper(), format=LOG_FORMAT)

    app.secret_key = setting("SECRET_KEY")
    app.config["DEBUG"] = bool(setting("DEBUG", False))
    app.config["TESTING"] = bool(setting("TESTING", False))

    backend = StoreBackend(setting("STORE_BACKEND", StoreBackend.MYSQL.value))
    db_config = setting("DB_CONFIG")
    local_store_path = setting("LOCAL_STORE_PATH")
    logger.info("settings=%s backend=%s", settings_module, backend.value)

    if backend == StoreBackend.MYSQL and setting("AUTO_INIT_DB", False):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(backend=backend, db_config=db_config, local_store_path=local_store_path)

    if setting("AUTO_SEED_DB", False):
        ensure_demo_users(container.users_repo)
        logger.info("Demo seed ready")

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_projects(app, container)
    register_shifts(app, container)
    register_broadcasts(app, container)

    app.extensions["attendance_tracker"] = container
    return app
