from __future__ import annotations

from datetime import datetime

import pytest

from src.work_tracker.work_tracker.storage.kv import MemoryKeyValueStore
from src.work_tracker.work_tracker.storage.record_store import RecordStore
from src.work_tracker.work_tracker.users.identity import DEMO_USERS


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday; the week runs Sunday 2026-03-08 .. Saturday 2026-03-14
    return datetime(2026, 3, 11, 9, 0, 0)


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store(kv) -> RecordStore:
    return RecordStore(kv, DEMO_USERS)
