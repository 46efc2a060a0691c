from __future__ import annotations

from datetime import date

import pytest

from src.work_tracker.work_tracker.storage.file_store import JSONFileKeyValueStore
from src.work_tracker.work_tracker.storage.record_store import RecordStore
from src.work_tracker.work_tracker.users.identity import DEMO_USERS


def test_file_store_set_get_remove(tmp_path):
    store = JSONFileKeyValueStore(tmp_path / "store.json")

    assert store.get("missing") is None
    store.set("a", "1")
    store.set("b", '{"x": 2}')
    assert store.get("a") == "1"
    assert sorted(store.keys()) == ["a", "b"]

    store.remove("a")
    store.remove("a")
    assert store.get("a") is None
    assert list(store.keys()) == ["b"]


def test_file_store_survives_reopen(tmp_path):
    path = tmp_path / "nested" / "store.json"
    JSONFileKeyValueStore(path).set("k", "v")

    assert JSONFileKeyValueStore(path).get("k") == "v"
    assert not list(path.parent.glob(".store-*"))


def test_file_store_rejects_corrupt_document(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ValueError):
        JSONFileKeyValueStore(path).get("k")


def test_record_store_over_file_store(tmp_path):
    path = tmp_path / "store.json"
    records = RecordStore(JSONFileKeyValueStore(path), DEMO_USERS)
    entry = records.add_time_entry(user_id="1", work_date=date(2026, 3, 9), check_in="09:00", check_out="17:30")
    records.upsert_monthly_settings("2026-03", 20, 8)

    reopened = RecordStore(JSONFileKeyValueStore(path), DEMO_USERS)
    assert reopened.get_time_entry(entry.entry_id).total_hours == 8.5
    assert reopened.get_monthly_settings("2026-03").required_hours == 160
