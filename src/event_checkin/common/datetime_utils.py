from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.constants import DATE_KEY_FORMAT


def try_parse_date(value: str) -> Optional[date]:
    """Parse a date key, accepting YYYY-MM-DD and a few other common layouts."""
    for fmt in (DATE_KEY_FORMAT, "%Y/%m/%d", "%m/%d/%Y", "%Y-%m-%dT%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).date()
        except (TypeError, ValueError):
            continue
    return None


def date_key(value: date | datetime) -> str:
    """Attendance document key for a calendar day."""
    return value.strftime(DATE_KEY_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_entry_time(value: datetime) -> str:
    """Human label such as 'March 5, 2024 - 9:07 AM'."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{value.strftime('%B')} {value.day}, {value.year} - {hour}:{value.minute:02d} {suffix}"
