from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.web import admin_required, ok
from ..container import Container
from .assembler import ReportFilter


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports", methods=["GET"], endpoint="reports")
    @admin_required
    def reports():
        report_filter = ReportFilter.from_args(request.args)
        data = container.payroll_report_service.build_report(report_filter)
        return ok(**data.to_dict())

    @app.route("/api/reports/period", methods=["GET"], endpoint="reports_period")
    @admin_required
    def reports_period():
        return ok(period=container.payroll_report_service.current_period_info(date.today()))
