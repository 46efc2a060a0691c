from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Optional

from ..common.datetime_utils import month_key, now_local, parse_clock_time, parse_month
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_DAILY_HOURS
from ..core.enums import ProgressStatus, Role
from ..core.exceptions import AuthorizationError, MissingFieldError, NotFoundError, ValidationError
from ..storage.record_store import RecordStore
from .calculations import daily_target_remaining, monthly_total, progress, progress_status, weekly_total
from .model import MonthlySettings, TimeEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeeklySummary:
    current_week: float
    last_week: float


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the user dashboard shows for one day."""

    today: date
    today_entry: Optional[TimeEntry]
    today_hours: float
    month: str
    month_total: float
    required_hours: float
    remaining_hours: float
    percentage: float
    remaining_work_days: int
    daily_target_remaining: float

    @property
    def is_checked_in(self) -> bool:
        return self.today_entry is not None and self.today_entry.is_open


@dataclass(frozen=True)
class UserProgressRow:
    """Read-model for the admin overview."""

    user_id: str
    name: str
    email: str
    month_hours: float
    required_hours: float
    percentage: float
    remaining_hours: float
    status: ProgressStatus


def _clock_value(value: time | str | None, *, now: datetime, field_name: str) -> time:
    if value is None:
        return now.time().replace(second=0, microsecond=0)
    if isinstance(value, time):
        return value
    return parse_clock_time(require_non_empty(value, field_name))


class TimesheetService:
    """Use cases of a regular user: check in/out, edit and review their own entries."""

    def __init__(self, store: RecordStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def check_in(self, user_id: str, check_in: time | str | None = None, *, now: datetime | None = None) -> TimeEntry:
        now = now or self._clock()
        today = now.date()
        start = _clock_value(check_in, now=now, field_name="Check-in time")

        if not self._store.get_user(user_id):
            raise NotFoundError("User not found")

        entry = self._store.add_time_entry_if_absent(user_id=user_id, work_date=today, check_in=start)
        if entry is None:
            raise ValidationError("You have already checked in today")
        logger.info("User %s checked in at %s on %s", user_id, start.strftime("%H:%M"), today.isoformat())
        return entry

    def check_out(self, user_id: str, check_out: time | str | None = None, *, now: datetime | None = None) -> TimeEntry:
        now = now or self._clock()
        today = now.date()
        end = _clock_value(check_out, now=now, field_name="Check-out time")

        entry = self.today_entry(user_id, today)
        if not entry:
            raise ValidationError("You have not checked in today")
        if not entry.is_open:
            raise ValidationError("You have already checked out today")

        updated = self._store.update_time_entry(entry.entry_id, check_out=end)
        logger.info("User %s checked out at %s (%.2fh)", user_id, end.strftime("%H:%M"), updated.total_hours)
        return updated

    def edit_entry(
        self,
        user_id: str,
        entry_id: str,
        *,
        check_in: time | str | None,
        check_out: time | str | None = None,
    ) -> TimeEntry:
        if check_in is None:
            raise MissingFieldError("Check-in time is required")
        if isinstance(check_in, str):
            check_in = require_non_empty(check_in, "Check-in time")
        if isinstance(check_out, str):
            check_out = check_out.strip() or None
        start = parse_clock_time(check_in)
        end = parse_clock_time(check_out) if check_out else None

        entry = self._store.get_time_entry(entry_id)
        if entry.user_id != user_id:
            raise AuthorizationError("You can only edit your own time entries")

        return self._store.update_time_entry(entry_id, check_in=start, check_out=end)

    def list_entries(self, user_id: str) -> list[TimeEntry]:
        """The user's entries, newest date first."""
        entries = self._store.list_time_entries(user_id)
        entries.sort(key=lambda e: (e.work_date, e.check_in), reverse=True)
        return entries

    def today_entry(self, user_id: str, today: date) -> Optional[TimeEntry]:
        return next((e for e in self._store.list_time_entries(user_id) if e.work_date == today), None)

    def weekly_summary(self, user_id: str, today: date | None = None) -> WeeklySummary:
        today = today or self._clock().date()
        entries = self._store.list_time_entries(user_id)
        return WeeklySummary(
            current_week=weekly_total(entries, today, 0),
            last_week=weekly_total(entries, today, 1),
        )

    def dashboard(self, user_id: str, today: date | None = None) -> DashboardSummary:
        today = today or self._clock().date()
        month = month_key(today)

        entries = self._store.list_time_entries(user_id)
        month_entries = [e for e in entries if month_key(e.work_date) == month]
        today_entry = next((e for e in entries if e.work_date == today), None)

        settings = self._store.get_monthly_settings(month)
        required = settings.required_hours
        total = monthly_total(entries, month)
        prog = progress(total, required)
        remaining_days = max(1, settings.working_days - len(month_entries))

        return DashboardSummary(
            today=today,
            today_entry=today_entry,
            today_hours=today_entry.total_hours if today_entry else 0.0,
            month=month,
            month_total=total,
            required_hours=required,
            remaining_hours=prog.remaining_hours,
            percentage=prog.percentage,
            remaining_work_days=remaining_days,
            daily_target_remaining=daily_target_remaining(prog.remaining_hours, remaining_days),
        )


class AdminService:
    """Use cases of an administrator: monthly targets and per-user progress."""

    def __init__(self, store: RecordStore):
        self._store = store

    def settings_for(self, month: str) -> MonthlySettings:
        return self._store.get_monthly_settings(parse_month(month))

    def update_monthly_settings(
        self,
        *,
        current_role: Role,
        month: str,
        working_days: int,
        daily_hours: float = DEFAULT_DAILY_HOURS,
    ) -> MonthlySettings:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        settings = self._store.upsert_monthly_settings(month, working_days, daily_hours)
        logger.info(
            "Monthly settings for %s set to %d days x %gh", settings.month, settings.working_days, settings.daily_hours
        )
        return settings

    def monthly_overview(self, *, current_role: Role, month: str) -> list[UserProgressRow]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        settings = self.settings_for(month)
        required = settings.required_hours
        entries = self._store.list_time_entries()

        rows: list[UserProgressRow] = []
        for user in self._store.list_users():
            if user.role != Role.USER:
                continue
            hours = monthly_total((e for e in entries if e.user_id == user.user_id), settings.month)
            prog = progress(hours, required)
            rows.append(
                UserProgressRow(
                    user_id=user.user_id,
                    name=user.name,
                    email=user.email,
                    month_hours=hours,
                    required_hours=required,
                    percentage=prog.percentage,
                    remaining_hours=prog.remaining_hours,
                    status=progress_status(prog.percentage),
                )
            )
        return rows
