from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.decimal_utils import round2, to_decimal
from ..factory import BreakDeductionFactory
from ..model import BreakInterval, CalculationResult, WorkInterval
from .base import PayrollCalculator


class TieredBreakCalculator(PayrollCalculator):
    """Net hours = wrapped shift length minus the tiered break deduction.

    Breaks up to 30 minutes are free, 31 to 60 minutes cost a flat half
    hour and anything longer is docked in full. Net minutes are not
    clamped, so a short shift with a long break yields negative hours.
    All rounding is to 2 places, ties away from zero.
    """

    def __init__(self, factory: Optional[BreakDeductionFactory] = None):
        self._factory = factory or BreakDeductionFactory()

    def calculate(self, work: WorkInterval, brk: Optional[BreakInterval] = None) -> CalculationResult:
        work_minutes = work.duration_minutes
        break_minutes = brk.duration_minutes if brk is not None else None

        decision = self._factory.for_break(break_minutes).decide(break_minutes=break_minutes or 0)
        net_minutes = work_minutes - decision.deduction_minutes

        return CalculationResult(
            hours_worked=round2(Decimal(net_minutes) / Decimal(60)),
            break_deduction_hours=decision.deduction_hours,
            break_minutes=break_minutes or 0,
            tier=decision.tier,
        )

    def calculate_pay(self, hours_worked, hourly_rate) -> Decimal:
        return round2(to_decimal(hours_worked) * to_decimal(hourly_rate))
