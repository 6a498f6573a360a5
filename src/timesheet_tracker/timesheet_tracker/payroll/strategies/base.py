from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ...core.enums import BreakTier


@dataclass(frozen=True)
class DeductionDecision:
    tier: BreakTier
    deduction_minutes: int
    deduction_hours: Decimal


class BreakDeductionStrategy(ABC):
    """Strategy Pattern: encapsulate how much of a break is unpaid."""

    @abstractmethod
    def decide(self, *, break_minutes: int) -> DeductionDecision:
        raise NotImplementedError
