from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import iso_week_key, month_key
from ..common.decimal_utils import round2
from ..core.enums import ReportPeriod
from ..timesheets.model import TimesheetFilter, TimesheetRow
from ..timesheets.repository import TimesheetRepository
from .calculator.base import PayrollCalculator
from .calculator.tiered_calculator import TieredBreakCalculator
from .model import CalculationResult, WorkInterval, break_from_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
    totals: dict


@dataclass(frozen=True)
class RowPay:
    result: CalculationResult
    pay: Decimal


_PERIOD_KEYS = {
    ReportPeriod.DAILY: lambda d: d.strftime("%Y-%m-%d"),
    ReportPeriod.WEEKLY: iso_week_key,
    ReportPeriod.MONTHLY: month_key,
}


class PayrollReportService:
    """Hours and pay per timesheet row, summed per user and per period.

    Every row is calculated on its own; totals are plain sums of those
    independently rounded values.
    """

    def __init__(
        self,
        timesheets: TimesheetRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._timesheets = timesheets
        self._calculator = calculator or TieredBreakCalculator()

    @property
    def calculator(self) -> PayrollCalculator:
        return self._calculator

    def calculate_row(self, row: TimesheetRow) -> RowPay:
        if bool(row.break_start) != bool(row.break_end):
            logger.warning("Timesheet %s has a half-recorded break; treating it as no break", row.timesheet_id)

        result = self._calculator.calculate(
            WorkInterval.of(row.start_time, row.end_time),
            break_from_bounds(row.break_start, row.break_end),
        )
        return RowPay(result=result, pay=self._calculator.calculate_pay(result.hours_worked, row.hourly_rate))

    def summarize(self, rows: Iterable[TimesheetRow]) -> ReportData:
        out_rows: list[dict] = []
        summary_map: dict[int, dict] = {}
        total_hours = Decimal("0")
        total_pay = Decimal("0")

        for r in rows:
            calc = self.calculate_row(r)
            item = r.to_dict()
            item.update(calc.result.to_dict())
            item["pay"] = float(calc.pay)
            out_rows.append(item)

            s = summary_map.get(r.user_id)
            if not s:
                s = {"user_id": r.user_id, "username": r.username, "hours": Decimal("0"), "pay": Decimal("0")}
                summary_map[r.user_id] = s
            s["hours"] += calc.result.hours_worked
            s["pay"] += calc.pay
            total_hours += calc.result.hours_worked
            total_pay += calc.pay

        summary = [
            {
                "user_id": s["user_id"],
                "username": s["username"],
                "total_hours": float(round2(s["hours"])),
                "total_pay": float(round2(s["pay"])),
            }
            for s in summary_map.values()
        ]
        summary.sort(key=lambda x: x["total_hours"], reverse=True)

        totals = {
            "entries": len(out_rows),
            "total_hours": float(round2(total_hours)),
            "total_pay": float(round2(total_pay)),
        }
        return ReportData(rows=out_rows, summary=summary, totals=totals)

    def build_timesheet_report(self, *, filters: TimesheetFilter) -> ReportData:
        return self.summarize(self._timesheets.list_rows(filters))

    def aggregate(self, rows: Iterable[TimesheetRow], period: ReportPeriod) -> list[dict]:
        """Totals keyed by day (YYYY-MM-DD), ISO week (YYYY-Www) or month (YYYY-MM)."""
        key_of = _PERIOD_KEYS[period]
        buckets: dict[str, dict] = {}

        for r in rows:
            calc = self.calculate_row(r)
            key = key_of(r.work_date)
            b = buckets.setdefault(key, {"period": key, "entries": 0, "hours": Decimal("0"), "pay": Decimal("0")})
            b["entries"] += 1
            b["hours"] += calc.result.hours_worked
            b["pay"] += calc.pay

        return [
            {
                "period": b["period"],
                "entries": b["entries"],
                "total_hours": float(round2(b["hours"])),
                "total_pay": float(round2(b["pay"])),
            }
            for _, b in sorted(buckets.items())
        ]
