from __future__ import annotations

from datetime import date

import pytest

from src.work_tracker.work_tracker.core.enums import ProgressStatus, Role
from src.work_tracker.work_tracker.core.exceptions import AuthorizationError
from src.work_tracker.work_tracker.timesheet.service import AdminService


def _fill(store, user_id: str, days: int, check_out: str) -> None:
    for day in range(1, days + 1):
        store.add_time_entry(user_id=user_id, work_date=date(2026, 3, day), check_in="09:00", check_out=check_out)


def test_only_admin_may_change_settings(store):
    admin = AdminService(store)
    with pytest.raises(AuthorizationError):
        admin.update_monthly_settings(current_role=Role.USER, month="2026-03", working_days=20)
    assert store.list_monthly_settings() == []


def test_update_monthly_settings_upserts(store):
    admin = AdminService(store)
    admin.update_monthly_settings(current_role=Role.ADMIN, month="2026-03", working_days=22, daily_hours=8)
    settings = admin.update_monthly_settings(current_role=Role.ADMIN, month="2026-03", working_days=18, daily_hours=7)

    assert settings.required_hours == 126
    assert admin.settings_for("2026-03") == settings
    assert len(store.list_monthly_settings()) == 1


def test_monthly_overview_reports_regular_users_only(store):
    admin = AdminService(store)
    admin.update_monthly_settings(current_role=Role.ADMIN, month="2026-03", working_days=20, daily_hours=8)
    _fill(store, "1", 20, "17:00")  # 160h
    _fill(store, "3", 17, "17:00")  # 136h -> 85%
    _fill(store, "2", 5, "17:00")
    store.add_time_entry(user_id="3", work_date=date(2026, 2, 27), check_in="09:00", check_out="17:00")

    rows = {r.user_id: r for r in admin.monthly_overview(current_role=Role.ADMIN, month="2026-03")}

    assert set(rows) == {"1", "3"}
    assert rows["1"].month_hours == 160
    assert rows["1"].percentage == 100
    assert rows["1"].status == ProgressStatus.COMPLETE
    assert rows["3"].month_hours == 136
    assert rows["3"].remaining_hours == 24
    assert rows["3"].status == ProgressStatus.ON_TRACK


def test_monthly_overview_uses_default_target(store):
    admin = AdminService(store)
    _fill(store, "1", 2, "13:00")

    rows = admin.monthly_overview(current_role=Role.ADMIN, month="2026-03")

    john = next(r for r in rows if r.user_id == "1")
    assert john.required_hours == 176
    assert john.month_hours == 8
    assert john.status == ProgressStatus.BEHIND


def test_monthly_overview_requires_admin(store):
    with pytest.raises(AuthorizationError):
        AdminService(store).monthly_overview(current_role=Role.USER, month="2026-03")
