from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.enums import BreakTier


@dataclass(frozen=True)
class TimeOfDay:
    """Wall-clock time on a 24-hour clock (no date, no timezone)."""

    hour: int
    minute: int

    def __post_init__(self):
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValueError(f"Invalid time of day: {self.hour}:{self.minute}")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """Parse an already validated HH:MM string."""
        hours, _, minutes = value.strip().partition(":")
        return cls(hour=int(hours), minute=int(minutes))

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def wrapped_minutes(start: TimeOfDay, end: TimeOfDay) -> int:
    """Minutes from start to end; an earlier end means the next day."""
    return (end.minutes - start.minutes) % MINUTES_PER_DAY


@dataclass(frozen=True)
class WorkInterval:
    """Span between two times of day, possibly crossing midnight."""

    start: TimeOfDay
    end: TimeOfDay

    @classmethod
    def of(cls, start: str, end: str) -> "WorkInterval":
        return cls(start=TimeOfDay.parse(start), end=TimeOfDay.parse(end))

    @property
    def duration_minutes(self) -> int:
        return wrapped_minutes(self.start, self.end)


# A break is a work interval nested in the shift; absent breaks are None.
BreakInterval = WorkInterval


def break_from_bounds(start: Optional[str], end: Optional[str]) -> Optional[BreakInterval]:
    """Build a break only when both bounds are present."""
    if start and end:
        return BreakInterval.of(start, end)
    return None


@dataclass(frozen=True)
class CalculationResult:
    hours_worked: Decimal
    break_deduction_hours: Decimal
    break_minutes: int
    tier: BreakTier = BreakTier.NONE

    def to_dict(self) -> dict:
        return {
            "hours_worked": float(self.hours_worked),
            "break_deduction_hours": float(self.break_deduction_hours),
            "break_minutes": self.break_minutes,
            "tier": self.tier.value,
        }
