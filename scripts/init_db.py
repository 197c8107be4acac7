"""Create the MySQL schema for the configured environment.

The local JSON backend needs no schema; running this with
STORE_BACKEND=local only reports that and exits.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import mysql.connector

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.core.enums import StoreBackend
from src.attendance_tracker.attendance_tracker.database.bootstrap import apply_schema, list_tables
from src.attendance_tracker.attendance_tracker.database.connection import DBConfig

logger = logging.getLogger("init_db")

SCHEMA_PATH = REPO_ROOT / "database" / "schema.sql"


def main() -> int:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")

    if StoreBackend(getattr(settings, "STORE_BACKEND", "mysql")) == StoreBackend.LOCAL:
        logger.info("%s uses the local JSON store; no schema to apply", settings_module)
        return 0

    target = DBConfig.from_dict(settings.DB_CONFIG)
    try:
        apply_schema(settings.DB_CONFIG, schema_path=SCHEMA_PATH)
        tables = list_tables(settings.DB_CONFIG)
    except mysql.connector.Error as e:
        logger.error("Schema bootstrap failed for %s@%s/%s: %s", target.user, target.host, target.database, e)
        return 1

    logger.info("Schema ready on %s@%s:%s/%s: %s", target.user, target.host, target.port, target.database, ", ".join(tables))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
