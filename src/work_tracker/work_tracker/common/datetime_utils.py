from __future__ import annotations

from datetime import date, datetime, time

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_clock_time(value: str | time) -> time:
    """Parse a time of day given as HH:MM or HH:MM:SS."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid time of day: {value!r}")
    value = value.strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time of day: {value!r}")


def format_clock_time(value: time) -> str:
    if value.second:
        return value.strftime("%H:%M:%S")
    return value.strftime("%H:%M")


def month_key(day: date) -> str:
    """YYYY-MM key of the month containing ``day``."""
    return day.strftime("%Y-%m")


def parse_month(value: str) -> str:
    """Validate and normalize a YYYY-MM month key."""
    if not isinstance(value, str):
        raise ValidationError(f"Invalid month: {value!r}")
    try:
        return datetime.strptime(value.strip(), "%Y-%m").strftime("%Y-%m")
    except ValueError:
        raise ValidationError(f"Invalid month: {value!r}") from None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now()
