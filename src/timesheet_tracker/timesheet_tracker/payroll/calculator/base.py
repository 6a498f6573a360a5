from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ..model import BreakInterval, CalculationResult, WorkInterval


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, work: WorkInterval, brk: Optional[BreakInterval] = None) -> CalculationResult:
        raise NotImplementedError

    @abstractmethod
    def calculate_pay(self, hours_worked, hourly_rate) -> Decimal:
        raise NotImplementedError
