"""Pure time arithmetic over time entries.

No I/O here: everything operates on the arguments only.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..common.datetime_utils import month_key, parse_clock_time
from ..core.constants import ON_TRACK_PERCENTAGE
from ..core.enums import ProgressStatus
from ..core.exceptions import ValidationError
from .model import Progress, TimeEntry

_REFERENCE_DATE = date(2000, 1, 1)


def round_hours(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def elapsed_hours(check_in: time | str, check_out: time | str) -> float:
    """Hours between two times of the same day, rounded to 2 decimals.

    A check-out earlier than the check-in (overnight shift) is rejected.
    """
    start = datetime.combine(_REFERENCE_DATE, parse_clock_time(check_in))
    end = datetime.combine(_REFERENCE_DATE, parse_clock_time(check_out))
    if end < start:
        raise ValidationError("Check-out time must not be earlier than check-in time")

    seconds = Decimal(int((end - start).total_seconds()))
    hours = (seconds / Decimal(3600)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return float(hours)


def monthly_total(entries: Iterable[TimeEntry], month: str) -> float:
    """Sum of total_hours over entries dated in ``month`` (YYYY-MM)."""
    return round_hours(math.fsum(e.total_hours for e in entries if month_key(e.work_date) == month))


def start_of_week(reference_date: date) -> date:
    # Weeks start on Sunday.
    return reference_date - timedelta(days=(reference_date.weekday() + 1) % 7)


def weekly_total(entries: Iterable[TimeEntry], reference_date: date, week_offset: int = 0) -> float:
    """Sum of total_hours over the Sunday-Saturday week ``week_offset`` weeks back."""
    start = start_of_week(reference_date) - timedelta(days=7 * week_offset)
    end = start + timedelta(days=6)
    return round_hours(math.fsum(e.total_hours for e in entries if start <= e.work_date <= end))


def progress(total_hours: float, required_hours: float) -> Progress:
    if required_hours <= 0:
        raise ValidationError("Required hours must be greater than 0")

    percentage = 100.0 * total_hours / required_hours
    remaining = max(0.0, required_hours - total_hours)
    return Progress(percentage=percentage, remaining_hours=round_hours(remaining))


def progress_status(percentage: float) -> ProgressStatus:
    if percentage >= 100:
        return ProgressStatus.COMPLETE
    if percentage >= ON_TRACK_PERCENTAGE:
        return ProgressStatus.ON_TRACK
    return ProgressStatus.BEHIND


def daily_target_remaining(remaining_hours: float, remaining_work_days: int) -> float:
    return remaining_hours / max(1, remaining_work_days)
