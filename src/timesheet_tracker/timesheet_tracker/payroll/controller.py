from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_time, require_hourly_rate, require_time
from ..common.web import current_user, login_required
from ..container import Container
from ..core.enums import ReportPeriod
from ..core.exceptions import ValidationError
from ..timesheets.service import parse_filters
from .model import WorkInterval, break_from_bounds


def register(app: Flask, container: Container) -> None:
    calculator = container.payroll_report_service.calculator

    @app.route("/api/calculate", methods=["POST"], endpoint="calculate")
    @login_required
    def calculate():
        """Ad-hoc hours (and optional pay) for a set of HH:MM inputs, e.g. a form preview."""
        body = request.get_json(silent=True) or {}
        start = require_time(body.get("start_time"), "start time")
        end = require_time(body.get("end_time"), "end time")
        break_start = optional_time(body.get("break_start"), "break start time")
        break_end = optional_time(body.get("break_end"), "break end time")
        if bool(break_start) != bool(break_end):
            raise ValidationError("Provide both break start and break end, or neither")

        result = calculator.calculate(WorkInterval.of(start, end), break_from_bounds(break_start, break_end))
        out = result.to_dict()

        rate = body.get("hourly_rate")
        if rate is not None:
            out["pay"] = float(calculator.calculate_pay(result.hours_worked, require_hourly_rate(rate)))
        return jsonify(out)

    @app.route("/api/timesheets/report", methods=["GET"], endpoint="timesheet_report")
    @login_required
    def timesheet_report():
        """Rows with hours/pay, per-user summary, grand totals and optional period buckets."""
        rows = container.timesheet_service.list_timesheets(
            current_user=current_user(),
            filters=parse_filters(request.args),
        )
        data = container.payroll_report_service.summarize(rows)
        payload = {"rows": data.rows, "summary": data.summary, "totals": data.totals}

        period_s = request.args.get("period")
        if period_s:
            try:
                period = ReportPeriod(period_s)
            except ValueError:
                raise ValidationError("period must be one of daily, weekly, monthly")
            payload["periods"] = container.payroll_report_service.aggregate(rows, period)
        return jsonify(payload)
