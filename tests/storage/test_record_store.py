from __future__ import annotations

import json
from datetime import date, time

import pytest

from src.work_tracker.work_tracker.core.constants import MONTHLY_SETTINGS_KEY, TIME_ENTRIES_KEY
from src.work_tracker.work_tracker.core.enums import Role
from src.work_tracker.work_tracker.core.exceptions import NotFoundError, ValidationError
from src.work_tracker.work_tracker.storage.record_store import RecordStore
from src.work_tracker.work_tracker.timesheet.calculations import elapsed_hours
from src.work_tracker.work_tracker.users.identity import DEMO_USERS


def test_list_time_entries_empty_when_uninitialized(store):
    assert store.list_time_entries() == []
    assert store.list_time_entries("1") == []
    assert store.list_monthly_settings() == []


def test_add_time_entry_assigns_unique_ids_and_persists(kv, store):
    a = store.add_time_entry(user_id="1", work_date=date(2026, 3, 10), check_in="09:00")
    b = store.add_time_entry(user_id="3", work_date=date(2026, 3, 10), check_in="08:30")

    assert a.entry_id != b.entry_id
    assert a.check_out is None
    assert a.total_hours == 0

    reopened = RecordStore(kv, DEMO_USERS)
    assert {e.entry_id for e in reopened.list_time_entries()} == {a.entry_id, b.entry_id}
    assert [e.entry_id for e in reopened.list_time_entries("3")] == [b.entry_id]

    raw = json.loads(kv.get(TIME_ENTRIES_KEY))
    assert raw[0]["date"] == "2026-03-10"
    assert raw[0]["check_in"] == "09:00"
    assert raw[0]["check_out"] is None


def test_update_recomputes_total_hours_from_times(store):
    entry = store.add_time_entry(user_id="1", work_date=date(2026, 3, 10), check_in="09:00")

    updated = store.update_time_entry(entry.entry_id, check_out="17:30", total_hours=99)

    assert updated.check_out == time(17, 30)
    assert updated.total_hours == elapsed_hours("09:00", "17:30") == 8.5
    assert store.get_time_entry(entry.entry_id).total_hours == 8.5


def test_update_check_in_rederives_existing_total(store):
    entry = store.add_time_entry(user_id="1", work_date=date(2026, 3, 10), check_in="09:00", check_out="17:00")
    assert entry.total_hours == 8

    updated = store.update_time_entry(entry.entry_id, check_in="10:00")
    assert updated.total_hours == 7


def test_update_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.update_time_entry("missing", check_out="17:00")


def test_update_to_unknown_user_raises_not_found(store):
    entry = store.add_time_entry(user_id="1", work_date=date(2026, 3, 10), check_in="09:00")
    with pytest.raises(NotFoundError):
        store.update_time_entry(entry.entry_id, user_id="999")
    assert store.get_time_entry(entry.entry_id).user_id == "1"

    moved = store.update_time_entry(entry.entry_id, user_id=3)
    assert moved.user_id == "3"


def test_add_time_entry_if_absent_keeps_one_entry_per_day(store):
    first = store.add_time_entry_if_absent(user_id="1", work_date=date(2026, 3, 10), check_in="09:00")
    assert first is not None
    assert store.add_time_entry_if_absent(user_id="1", work_date=date(2026, 3, 10), check_in="10:00") is None
    assert store.add_time_entry_if_absent(user_id="3", work_date=date(2026, 3, 10), check_in="10:00") is not None
    assert [e.entry_id for e in store.list_time_entries("1")] == [first.entry_id]


def test_update_rejects_unknown_fields(store):
    entry = store.add_time_entry(user_id="1", work_date=date(2026, 3, 10), check_in="09:00")
    with pytest.raises(ValidationError):
        store.update_time_entry(entry.entry_id, colour="red")


def test_failed_update_leaves_state_untouched(kv, store):
    entry = store.add_time_entry(user_id="1", work_date=date(2026, 3, 10), check_in="09:00")
    before = kv.get(TIME_ENTRIES_KEY)

    with pytest.raises(ValidationError):
        store.update_time_entry(entry.entry_id, check_out="08:00")

    assert kv.get(TIME_ENTRIES_KEY) == before
    assert store.get_time_entry(entry.entry_id).is_open


def test_delete_missing_entry_is_noop(kv, store):
    store.add_time_entry(user_id="1", work_date=date(2026, 3, 10), check_in="09:00")
    before = kv.get(TIME_ENTRIES_KEY)

    store.delete_time_entry("does-not-exist")

    assert len(store.list_time_entries()) == 1
    assert kv.get(TIME_ENTRIES_KEY) == before


def test_delete_existing_entry(store):
    entry = store.add_time_entry(user_id="1", work_date=date(2026, 3, 10), check_in="09:00")
    store.delete_time_entry(entry.entry_id)
    store.delete_time_entry(entry.entry_id)
    assert store.list_time_entries() == []


def test_upsert_monthly_settings_keeps_one_record_per_month(store):
    store.upsert_monthly_settings("2026-03", 22, 8)
    store.upsert_monthly_settings("2026-03", 20, 7.5)
    store.upsert_monthly_settings("2026-04", 21)

    settings = store.list_monthly_settings()
    march = [s for s in settings if s.month == "2026-03"]
    assert len(march) == 1
    assert march[0].working_days == 20
    assert march[0].daily_hours == 7.5
    assert march[0].required_hours == 150

    april = store.get_monthly_settings("2026-04")
    assert april.daily_hours == 8
    assert not april.is_default


@pytest.mark.parametrize(
    "month, working_days, daily_hours",
    [
        ("2026-03", 0, 8),
        ("2026-03", 32, 8),
        ("2026-03", 21.5, 8),
        ("2026-03", 22, 0),
        ("2026-03", 22, 25),
        ("March", 22, 8),
    ],
)
def test_upsert_monthly_settings_validates_input(store, month, working_days, daily_hours):
    with pytest.raises(ValidationError):
        store.upsert_monthly_settings(month, working_days, daily_hours)
    assert store.list_monthly_settings() == []


def test_get_monthly_settings_falls_back_to_default(store):
    settings = store.get_monthly_settings("2030-01")
    assert settings.is_default
    assert settings.working_days == 22
    assert settings.daily_hours == 8
    assert settings.required_hours == 176


def test_initialize_sample_data_seeds_once(store, fixed_now):
    today = fixed_now.date()
    store.initialize_sample_data(today=today)

    entries = store.list_time_entries()
    assert len(entries) == 1
    assert entries[0].user_id == "1"
    assert entries[0].work_date == today
    assert entries[0].total_hours == 8.5

    settings = store.list_monthly_settings()
    assert [(s.month, s.working_days, s.daily_hours) for s in settings] == [("2026-03", 22, 8)]

    store.add_time_entry(user_id="3", work_date=today, check_in="08:00")
    store.initialize_sample_data(today=today)
    assert len(store.list_time_entries()) == 2


def test_initialize_sample_data_does_not_clobber_existing_state(kv, store, fixed_now):
    kv.set(TIME_ENTRIES_KEY, "[]")
    kv.set(MONTHLY_SETTINGS_KEY, json.dumps([{"month": "2026-03", "working_days": 18, "daily_hours": 6}]))

    store.initialize_sample_data(today=fixed_now.date())

    assert store.list_time_entries() == []
    assert store.get_monthly_settings("2026-03").working_days == 18


def test_list_users_returns_seed_set(store):
    users = store.list_users()
    assert [u.email for u in users] == ["user@company.com", "admin@company.com", "jane@company.com"]
    assert store.get_user("2").role == Role.ADMIN
    assert store.get_user("99") is None
