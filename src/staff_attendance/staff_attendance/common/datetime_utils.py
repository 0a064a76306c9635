from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.constants import END_OF_DAY
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_timestamp(value: datetime | str) -> datetime:
    """Accept a datetime or an ISO-8601 string and return a naive local datetime.

    Offsets are dropped: every time is read as store wall-clock time.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Timestamp is required")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1]
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        raise ValidationError(f"Invalid timestamp {value!r}")


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour HH:MM string."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def minutes_since_midnight(value: datetime | time) -> int:
    """Wall-clock minutes, seconds discarded."""
    return value.hour * 60 + value.minute


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def format_hhmm(minutes: int) -> str:
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
