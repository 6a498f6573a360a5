"""Example: use the hours calculator and report service directly (no Flask, no DB)."""

from datetime import date
from decimal import Decimal

from src.timesheet_tracker.timesheet_tracker.core.enums import ReportPeriod
from src.timesheet_tracker.timesheet_tracker.payroll.calculator.tiered_calculator import TieredBreakCalculator
from src.timesheet_tracker.timesheet_tracker.payroll.model import WorkInterval, break_from_bounds
from src.timesheet_tracker.timesheet_tracker.payroll.service import PayrollReportService
from src.timesheet_tracker.timesheet_tracker.timesheets.model import TimesheetRow


def main():
    calc = TieredBreakCalculator()
    result = calc.calculate(WorkInterval.of("09:00", "17:30"), break_from_bounds("12:00", "12:45"))
    print(result.to_dict(), calc.calculate_pay(result.hours_worked, Decimal("25.00")))

    rows = [
        TimesheetRow(1, 2, "painter", Decimal("20.00"), date(2025, 1, 6), "07:00", "15:30", "11:00", "11:30", "Oak St."),
        TimesheetRow(2, 2, "painter", Decimal("20.00"), date(2025, 1, 8), "22:00", "06:00", None, None, "Mall"),
    ]
    reports = PayrollReportService(timesheets=None, calculator=calc)
    print(reports.summarize(rows).totals)
    print(reports.aggregate(rows, ReportPeriod.WEEKLY))


if __name__ == "__main__":
    main()
