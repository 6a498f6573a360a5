from __future__ import annotations

import re
from datetime import date, datetime

from ..core.constants import DATE_PATTERN, TIME_PATTERN

_TIME_RE = re.compile(TIME_PATTERN)
_DATE_RE = re.compile(DATE_PATTERN)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def is_hhmm(value) -> bool:
    return isinstance(value, str) and _TIME_RE.fullmatch(value) is not None


def is_iso_date(value) -> bool:
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def iso_week_key(d: date) -> str:
    year, week, _ = d.isocalendar()
    return f"{year}-W{week:02d}"


def month_key(d: date) -> str:
    return d.strftime("%Y-%m")
