from __future__ import annotations

from decimal import Decimal

from ...core.constants import FLAT_CREDIT_DEDUCTION_MINUTES
from ...core.enums import BreakTier
from .base import BreakDeductionStrategy, DeductionDecision


class FlatCreditStrategy(BreakDeductionStrategy):
    """Medium break: a flat half hour is deducted whatever its length."""

    def decide(self, *, break_minutes: int) -> DeductionDecision:
        return DeductionDecision(
            tier=BreakTier.FLAT_CREDIT,
            deduction_minutes=FLAT_CREDIT_DEDUCTION_MINUTES,
            deduction_hours=Decimal("0.5"),
        )
