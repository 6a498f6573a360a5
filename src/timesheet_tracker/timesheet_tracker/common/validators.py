from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import is_hhmm, is_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_date(value: Optional[str]) -> str:
    if not is_iso_date(value):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")
    return value


def require_time(value: Optional[str], label: str = "time") -> str:
    if not is_hhmm(value):
        raise ValidationError(f"Invalid {label} format. Use HH:MM (24-hour)")
    return value


def optional_text(value, field_name: str) -> Optional[str]:
    """Stripped string, or None when missing or blank. Non-strings are rejected."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value.strip() or None


def optional_time(value, label: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Invalid {label} format. Use HH:MM (24-hour)")
    v = optional_text(value, label)
    if v is None:
        return None
    return require_time(v, label)


def require_hourly_rate(value) -> Decimal:
    if value is None or value == "":
        raise ValidationError("Hourly rate is required")
    try:
        rate = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError("Hourly rate must be a positive number")
    if not rate.is_finite() or rate < 0:
        raise ValidationError("Hourly rate must be a positive number")
    return rate
