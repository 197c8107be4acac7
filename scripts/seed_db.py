from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container
from src.attendance_tracker.attendance_tracker.database.bootstrap import ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=getattr(settings, "STORE_BACKEND", "mysql"),
        db_config=dict(settings.DB_CONFIG),
        local_store_path=getattr(settings, "LOCAL_STORE_PATH", None),
    )
    ensure_demo_users(container.users_repo)

    print(f"OK: Seeded demo users -> {container.backend.value} store")


if __name__ == "__main__":
    main()
