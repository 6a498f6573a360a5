from __future__ import annotations

from decimal import Decimal

from ...common.decimal_utils import round2
from ...core.enums import BreakTier
from .base import BreakDeductionStrategy, DeductionDecision


class FullDeductionStrategy(BreakDeductionStrategy):
    """Long break: every minute is docked, not just the excess."""

    def decide(self, *, break_minutes: int) -> DeductionDecision:
        return DeductionDecision(
            tier=BreakTier.FULL,
            deduction_minutes=break_minutes,
            deduction_hours=round2(Decimal(break_minutes) / Decimal(60)),
        )
