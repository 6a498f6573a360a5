from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import FLAT_CREDIT_MAX_MINUTES, FREE_BREAK_MAX_MINUTES
from .strategies.base import BreakDeductionStrategy
from .strategies.flat_credit_strategy import FlatCreditStrategy
from .strategies.free_break_strategy import FreeBreakStrategy
from .strategies.full_deduction_strategy import FullDeductionStrategy
from .strategies.no_break_strategy import NoBreakStrategy


@dataclass
class BreakDeductionFactory:
    """Factory Pattern: choose the deduction tier from the raw break length."""

    free_max_minutes: int = FREE_BREAK_MAX_MINUTES
    flat_credit_max_minutes: int = FLAT_CREDIT_MAX_MINUTES

    def for_break(self, break_minutes: Optional[int]) -> BreakDeductionStrategy:
        if break_minutes is None:
            return NoBreakStrategy()
        if break_minutes <= self.free_max_minutes:
            return FreeBreakStrategy()
        if break_minutes <= self.flat_credit_max_minutes:
            return FlatCreditStrategy()
        return FullDeductionStrategy()
