from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


def parse_locations(value: Optional[str]) -> list[str]:
    """Split the comma-separated location field into trimmed names."""
    return [part.strip() for part in (value or "").split(",") if part.strip()]


@dataclass(frozen=True)
class Timesheet:
    """Domain entity: one painter's work interval for one date.

    Times are stored as validated HH:MM strings.
    """

    timesheet_id: int
    user_id: int
    work_date: date
    start_time: str
    end_time: str
    break_start: Optional[str]
    break_end: Optional[str]
    location: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class TimesheetRow:
    """Read-model joined with the owner's username and hourly rate."""

    timesheet_id: int
    user_id: int
    username: str
    hourly_rate: Decimal
    work_date: date
    start_time: str
    end_time: str
    break_start: Optional[str]
    break_end: Optional[str]
    location: str
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.timesheet_id,
            "user_id": self.user_id,
            "username": self.username,
            "hourly_rate": float(self.hourly_rate),
            "date": self.work_date.strftime("%Y-%m-%d"),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "break_start": self.break_start,
            "break_end": self.break_end,
            "location": self.location,
            "locations": parse_locations(self.location),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class TimesheetInput:
    """Validated create/update payload."""

    work_date: date
    start_time: str
    end_time: str
    break_start: Optional[str]
    break_end: Optional[str]
    location: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class TimesheetFilter:
    user_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    location: Optional[str] = None
