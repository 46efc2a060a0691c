from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_clock_time, parse_clock_time, parse_iso_date


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one user's work session on one calendar day.

    ``total_hours`` is derived from the two times and is 0 while the entry is open.
    """

    entry_id: str
    user_id: str
    work_date: date
    check_in: time
    check_out: Optional[time]
    total_hours: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "check_in": format_clock_time(self.check_in),
            "check_out": format_clock_time(self.check_out) if self.check_out else None,
            "total_hours": self.total_hours,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimeEntry":
        check_out = data.get("check_out")
        return cls(
            entry_id=str(data["id"]),
            user_id=str(data["user_id"]),
            work_date=parse_iso_date(data["date"]),
            check_in=parse_clock_time(data["check_in"]),
            check_out=parse_clock_time(check_out) if check_out else None,
            total_hours=float(data.get("total_hours") or 0),
        )


@dataclass(frozen=True)
class MonthlySettings:
    """Tenant-wide working-time policy for one month (YYYY-MM)."""

    month: str
    working_days: int
    daily_hours: float
    is_default: bool = False

    @property
    def required_hours(self) -> float:
        return self.working_days * self.daily_hours

    def to_dict(self) -> dict:
        return {"month": self.month, "working_days": self.working_days, "daily_hours": self.daily_hours}

    @classmethod
    def from_dict(cls, data: dict) -> "MonthlySettings":
        return cls(
            month=str(data["month"]),
            working_days=int(data["working_days"]),
            daily_hours=float(data["daily_hours"]),
        )


@dataclass(frozen=True)
class Progress:
    percentage: float
    remaining_hours: float

    @property
    def display_percentage(self) -> float:
        """Percentage clamped to 100 for progress bars."""
        return min(100.0, self.percentage)
