from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    PAINTER = "painter"


class BreakTier(str, Enum):
    """Which break deduction band applied to a timesheet."""

    NONE = "NONE"
    FREE = "FREE"
    FLAT_CREDIT = "FLAT_CREDIT"
    FULL = "FULL"


class ReportPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
