from __future__ import annotations

import json
import logging
import threading
import uuid
from dataclasses import replace
from datetime import date, time
from typing import Optional, Sequence

from ..common.datetime_utils import month_key, parse_clock_time, parse_iso_date, parse_month
from ..common.validators import require_int_range, require_positive
from ..core.constants import (
    DEFAULT_DAILY_HOURS,
    DEFAULT_WORKING_DAYS,
    MAX_DAILY_HOURS,
    MAX_WORKING_DAYS,
    MONTHLY_SETTINGS_KEY,
    TIME_ENTRIES_KEY,
)
from ..core.exceptions import NotFoundError, ValidationError
from ..timesheet.calculations import elapsed_hours
from ..timesheet.model import MonthlySettings, TimeEntry
from ..users.model import User
from .kv import KeyValueStore

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"user_id", "work_date", "check_in", "check_out"}


class RecordStore:
    """Persistence facade over a key-value store for users, time entries and monthly settings.

    Each collection is one JSON array under its own key and every mutation
    rewrites the whole array. ``total_hours`` is always re-derived from the
    entry's times, never taken from the caller.
    """

    def __init__(self, kv: KeyValueStore, users: Sequence[User]):
        self._kv = kv
        self._users = tuple(users)
        self._lock = threading.RLock()

    # ---- users ----

    def list_users(self) -> list[User]:
        return list(self._users)

    def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.user_id == user_id), None)

    # ---- time entries ----

    def list_time_entries(self, user_id: Optional[str] = None) -> list[TimeEntry]:
        entries = [TimeEntry.from_dict(d) for d in self._read(TIME_ENTRIES_KEY)]
        if user_id is None:
            return entries
        return [e for e in entries if e.user_id == user_id]

    def get_time_entry(self, entry_id: str) -> TimeEntry:
        for entry in self.list_time_entries():
            if entry.entry_id == entry_id:
                return entry
        raise NotFoundError("Time entry not found")

    def add_time_entry(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in: time | str,
        check_out: time | str | None = None,
    ) -> TimeEntry:
        with self._lock:
            rows = self._read(TIME_ENTRIES_KEY)
            taken = {str(r["id"]) for r in rows}
            entry = _derive(
                TimeEntry(
                    entry_id=_new_id(taken),
                    user_id=str(user_id),
                    work_date=work_date,
                    check_in=parse_clock_time(check_in),
                    check_out=parse_clock_time(check_out) if check_out else None,
                )
            )
            rows.append(entry.to_dict())
            self._write(TIME_ENTRIES_KEY, rows)
        return entry

    def add_time_entry_if_absent(self, *, user_id: str, work_date: date, check_in: time | str) -> Optional[TimeEntry]:
        """Add an open entry unless ``user_id`` already has one on ``work_date``.

        The lookup and the append happen under one lock. Returns None when an
        entry for that day exists.
        """
        with self._lock:
            if any(e.work_date == work_date for e in self.list_time_entries(str(user_id))):
                return None
            return self.add_time_entry(user_id=user_id, work_date=work_date, check_in=check_in)

    def update_time_entry(self, entry_id: str, **changes) -> TimeEntry:
        """Merge ``changes`` into the entry with ``entry_id``.

        Accepts user_id, work_date, check_in and check_out; a supplied
        total_hours is ignored because it is recomputed from the times.
        """
        changes.pop("total_hours", None)
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown time entry fields: {', '.join(sorted(unknown))}")

        if "check_in" in changes:
            changes["check_in"] = parse_clock_time(changes["check_in"])
        if "check_out" in changes:
            changes["check_out"] = parse_clock_time(changes["check_out"]) if changes["check_out"] else None
        if isinstance(changes.get("work_date"), str):
            changes["work_date"] = parse_iso_date(changes["work_date"])
        if "user_id" in changes:
            changes["user_id"] = str(changes["user_id"])
            if not self.get_user(changes["user_id"]):
                raise NotFoundError("User not found")

        with self._lock:
            rows = self._read(TIME_ENTRIES_KEY)
            for i, row in enumerate(rows):
                if str(row["id"]) == entry_id:
                    updated = _derive(replace(TimeEntry.from_dict(row), **changes))
                    rows[i] = updated.to_dict()
                    self._write(TIME_ENTRIES_KEY, rows)
                    return updated
        raise NotFoundError("Time entry not found")

    def delete_time_entry(self, entry_id: str) -> None:
        with self._lock:
            rows = self._read(TIME_ENTRIES_KEY)
            kept = [r for r in rows if str(r["id"]) != entry_id]
            if len(kept) != len(rows):
                self._write(TIME_ENTRIES_KEY, kept)

    # ---- monthly settings ----

    def list_monthly_settings(self) -> list[MonthlySettings]:
        return [MonthlySettings.from_dict(d) for d in self._read(MONTHLY_SETTINGS_KEY)]

    def get_monthly_settings(self, month: str) -> MonthlySettings:
        """Stored settings for ``month`` or the 22 days x 8 hours fallback."""
        for settings in self.list_monthly_settings():
            if settings.month == month:
                return settings
        return MonthlySettings(
            month=month,
            working_days=DEFAULT_WORKING_DAYS,
            daily_hours=DEFAULT_DAILY_HOURS,
            is_default=True,
        )

    def upsert_monthly_settings(self, month: str, working_days: int, daily_hours: float = DEFAULT_DAILY_HOURS) -> MonthlySettings:
        settings = MonthlySettings(
            month=parse_month(month),
            working_days=require_int_range(working_days, "Working days", minimum=1, maximum=MAX_WORKING_DAYS),
            daily_hours=require_positive(daily_hours, "Daily hours", maximum=MAX_DAILY_HOURS),
        )

        with self._lock:
            rows = self._read(MONTHLY_SETTINGS_KEY)
            for i, row in enumerate(rows):
                if row.get("month") == settings.month:
                    rows[i] = settings.to_dict()
                    break
            else:
                rows.append(settings.to_dict())
            self._write(MONTHLY_SETTINGS_KEY, rows)
        return settings

    # ---- first-use seeding ----

    def initialize_sample_data(self, *, today: date) -> None:
        """Seed one sample entry and this month's settings unless already present."""
        with self._lock:
            if self._kv.get(TIME_ENTRIES_KEY) is None:
                sample = _derive(
                    TimeEntry(
                        entry_id="1",
                        user_id=self._users[0].user_id if self._users else "1",
                        work_date=today,
                        check_in=time(9, 0),
                        check_out=time(17, 30),
                    )
                )
                self._write(TIME_ENTRIES_KEY, [sample.to_dict()])
                logger.info("Seeded sample time entry for %s", today.isoformat())

            if self._kv.get(MONTHLY_SETTINGS_KEY) is None:
                settings = MonthlySettings(
                    month=month_key(today),
                    working_days=DEFAULT_WORKING_DAYS,
                    daily_hours=DEFAULT_DAILY_HOURS,
                )
                self._write(MONTHLY_SETTINGS_KEY, [settings.to_dict()])
                logger.info("Seeded monthly settings for %s", settings.month)

    # ---- helpers ----

    def _read(self, key: str) -> list[dict]:
        raw = self._kv.get(key)
        if not raw:
            return []
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"Corrupt collection under {key!r} (expected a JSON array)")
        return data

    def _write(self, key: str, rows: list[dict]) -> None:
        self._kv.set(key, json.dumps(rows))


def _derive(entry: TimeEntry) -> TimeEntry:
    total = elapsed_hours(entry.check_in, entry.check_out) if entry.check_out else 0.0
    return replace(entry, total_hours=total)


def _new_id(taken: set[str]) -> str:
    while True:
        candidate = uuid.uuid4().hex
        if candidate not in taken:
            return candidate
