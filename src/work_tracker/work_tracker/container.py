from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .storage.file_store import JSONFileKeyValueStore
from .storage.kv import KeyValueStore, MemoryKeyValueStore
from .storage.mysql_store import MySQLKeyValueStore
from .storage.record_store import RecordStore
from .timesheet.service import AdminService, TimesheetService
from .users.identity import IdentityProvider, StaticIdentityProvider
from .users.service import SessionService


@dataclass(frozen=True)
class Container:
    kv_store: KeyValueStore
    identity: IdentityProvider
    record_store: RecordStore

    session_service: SessionService
    timesheet_service: TimesheetService
    admin_service: AdminService

    clock: Callable[[], datetime] = now_local


def build_kv_store(*, backend: str, store_path: str | Path | None = None, db_config: Optional[dict] = None) -> KeyValueStore:
    backend = (backend or "memory").lower()
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "file":
        if not store_path:
            raise ValueError("STORE_PATH is required for the file store backend")
        return JSONFileKeyValueStore(store_path)
    if backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql store backend")
        return MySQLKeyValueStore(DatabaseConnection(DBConfig.from_dict(db_config)))
    raise ValueError(f"Unknown store backend: {backend!r}")


def build_container(
    *,
    kv_store: KeyValueStore,
    session_store: Optional[KeyValueStore] = None,
    identity: Optional[StaticIdentityProvider] = None,
    login_delay_seconds: float = 0.0,
    seed_sample_data: bool = False,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    identity = identity or StaticIdentityProvider()
    record_store = RecordStore(kv_store, identity.users)
    if seed_sample_data:
        record_store.initialize_sample_data(today=clock().date())

    session_service = SessionService(
        identity,
        session_store if session_store is not None else kv_store,
        login_delay_seconds=login_delay_seconds,
    )
    timesheet_service = TimesheetService(record_store, clock=clock)
    admin_service = AdminService(record_store)

    return Container(
        kv_store=kv_store,
        identity=identity,
        record_store=record_store,
        session_service=session_service,
        timesheet_service=timesheet_service,
        admin_service=admin_service,
        clock=clock,
    )
