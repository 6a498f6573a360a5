from __future__ import annotations

import logging
from datetime import date

from src.timesheet_tracker.timesheet_tracker.core.enums import ReportPeriod
from src.timesheet_tracker.timesheet_tracker.payroll.service import PayrollReportService
from src.timesheet_tracker.timesheet_tracker.timesheets.model import TimesheetFilter


class FakeTimesheetRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_filters = None

    def list_rows(self, filters):
        self.last_filters = filters
        return self._rows


def test_report_rows_carry_hours_and_pay(timesheets_repo):
    svc = PayrollReportService(timesheets_repo)
    report = svc.build_timesheet_report(filters=TimesheetFilter())

    by_id = {r["id"]: r for r in report.rows}
    assert by_id[1]["hours_worked"] == 8.5
    assert by_id[1]["pay"] == 170.0
    assert by_id[2]["break_deduction_hours"] == 0.5
    assert by_id[2]["break_minutes"] == 45
    assert by_id[4]["hours_worked"] == 8.0
    assert by_id[2]["locations"] == ["Oak St. residence", "Elm Ave. office"]


def test_report_summary_and_totals(timesheets_repo):
    report = PayrollReportService(timesheets_repo).build_timesheet_report(filters=TimesheetFilter())

    assert report.summary == [
        {"user_id": 2, "username": "bob", "total_hours": 17.0, "total_pay": 340.0},
        {"user_id": 3, "username": "carol", "total_hours": 16.0, "total_pay": 480.0},
    ]
    assert report.totals == {"entries": 4, "total_hours": 33.0, "total_pay": 820.0}


def test_report_forwards_filters():
    repo = FakeTimesheetRepo([])
    filters = TimesheetFilter(user_id=123, date_from=date(2025, 1, 1))

    report = PayrollReportService(repo).build_timesheet_report(filters=filters)

    assert repo.last_filters is filters
    assert report.totals["entries"] == 0


def test_weekly_aggregation_uses_iso_weeks(timesheets_repo):
    svc = PayrollReportService(timesheets_repo)
    rows = timesheets_repo.list_rows(TimesheetFilter())

    assert svc.aggregate(rows, ReportPeriod.WEEKLY) == [
        {"period": "2025-W02", "entries": 3, "total_hours": 25.0, "total_pay": 580.0},
        {"period": "2025-W03", "entries": 1, "total_hours": 8.0, "total_pay": 240.0},
    ]


def test_daily_and_monthly_aggregation(timesheets_repo):
    svc = PayrollReportService(timesheets_repo)
    rows = timesheets_repo.list_rows(TimesheetFilter())

    daily = svc.aggregate(rows, ReportPeriod.DAILY)
    assert [d["period"] for d in daily] == ["2025-01-06", "2025-01-07", "2025-01-14"]
    assert daily[1] == {"period": "2025-01-07", "entries": 2, "total_hours": 16.5, "total_pay": 410.0}

    assert svc.aggregate(rows, ReportPeriod.MONTHLY) == [
        {"period": "2025-01", "entries": 4, "total_hours": 33.0, "total_pay": 820.0},
    ]


def test_half_recorded_break_is_ignored_with_warning(row_factory, caplog):
    row = row_factory(break_start="12:00", break_end=None)
    svc = PayrollReportService(FakeTimesheetRepo([row]))

    with caplog.at_level(logging.WARNING):
        calc = svc.calculate_row(row)

    assert float(calc.result.hours_worked) == 8.0
    assert calc.result.break_minutes == 0
    assert "half-recorded break" in caplog.text
