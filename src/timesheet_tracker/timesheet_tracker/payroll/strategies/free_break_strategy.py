from __future__ import annotations

from decimal import Decimal

from ...core.enums import BreakTier
from .base import BreakDeductionStrategy, DeductionDecision


class FreeBreakStrategy(BreakDeductionStrategy):
    """Short break: nothing deducted."""

    def decide(self, *, break_minutes: int) -> DeductionDecision:
        return DeductionDecision(tier=BreakTier.FREE, deduction_minutes=0, deduction_hours=Decimal("0"))
