from __future__ import annotations

import pytest

from config import get_settings_module
from src.work_tracker.work_tracker.container import build_container, build_kv_store
from src.work_tracker.work_tracker.storage.file_store import JSONFileKeyValueStore
from src.work_tracker.work_tracker.storage.kv import MemoryKeyValueStore


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "config.production"),
        ("prod", "config.production"),
        ("Testing", "config.testing"),
        ("dev", "config.development"),
    ],
)
def test_settings_module_from_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == expected


def test_settings_module_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"


def test_build_kv_store_backends(tmp_path):
    assert isinstance(build_kv_store(backend="memory"), MemoryKeyValueStore)
    assert isinstance(build_kv_store(backend="file", store_path=tmp_path / "s.json"), JSONFileKeyValueStore)

    with pytest.raises(ValueError):
        build_kv_store(backend="file")
    with pytest.raises(ValueError):
        build_kv_store(backend="mysql")
    with pytest.raises(ValueError):
        build_kv_store(backend="redis")


def test_build_container_seeds_sample_data(fixed_now):
    container = build_container(kv_store=MemoryKeyValueStore(), seed_sample_data=True, clock=lambda: fixed_now)

    entries = container.record_store.list_time_entries("1")
    assert len(entries) == 1
    assert entries[0].work_date == fixed_now.date()
    assert container.admin_service.settings_for("2026-03").required_hours == 176
