"""Example: using the service layer directly (no Flask).

Controllers stay thin; the payroll report below is the same data the
/api/reports endpoint returns.
"""

import importlib
import json

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container
from src.attendance_tracker.attendance_tracker.payroll.assembler import ReportFilter


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=settings.STORE_BACKEND,
        db_config=settings.DB_CONFIG,
        local_store_path=settings.LOCAL_STORE_PATH,
    )
    report = container.payroll_report_service.build_report(ReportFilter())
    print(json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
