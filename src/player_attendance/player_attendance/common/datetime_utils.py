from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..core.constants import DATE_FORMAT, DATETIME_FORMAT, DEFAULT_UTC_OFFSET_HOURS, TIME_FORMAT
from ..core.exceptions import ValidationError


def now_ms() -> int:
    """Current instant in milliseconds since the epoch."""
    return int(time.time() * 1000)


def business_tz(offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> timezone:
    return timezone(timedelta(hours=offset_hours))


def to_business_datetime(ms: int, offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=business_tz(offset_hours))


def business_date(ms: int, offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> date:
    """Calendar day of ``ms`` in the fixed business timezone.

    Same as shifting the instant by the offset and taking the UTC date, so the
    host timezone never leaks in.
    """
    return to_business_datetime(ms, offset_hours).date()


def business_today(ms: Optional[int] = None, offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> str:
    if ms is None:
        ms = now_ms()
    return business_date(ms, offset_hours).strftime(DATE_FORMAT)


def business_yesterday(ms: Optional[int] = None, offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> str:
    if ms is None:
        ms = now_ms()
    return (business_date(ms, offset_hours) - timedelta(days=1)).strftime(DATE_FORMAT)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def require_iso_date(value: Optional[str], field_name: str = "date") -> str:
    """Validate a YYYY-MM-DD string and return it normalised."""
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(str(value).strip()).strftime(DATE_FORMAT)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format") from None


def format_timestamp(ms: Optional[int], offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> Optional[str]:
    if ms is None:
        return None
    return to_business_datetime(ms, offset_hours).strftime(DATETIME_FORMAT)


def format_clock(ms: Optional[int], offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> str:
    if ms is None:
        return ""
    return to_business_datetime(ms, offset_hours).strftime(TIME_FORMAT)


def format_duration(ms: int) -> str:
    """Elapsed milliseconds as HH:MM:SS (hours may exceed 24)."""
    total_seconds = max(0, int(ms) // 1000)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
