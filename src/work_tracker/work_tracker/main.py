from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import register_error_handlers
from .container import build_container, build_kv_store
from .core.constants import DEFAULT_LOGIN_DELAY_SECONDS
from .core.logging import configure_logging
from .database.bootstrap import apply_schema
from .storage.mysql_store import MySQLKeyValueStore
from .storage.session_store import FlaskSessionStore
from .timesheet.controller import register as register_timesheet
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = getattr(settings, "STORE_BACKEND", "memory")
    kv_store = build_kv_store(
        backend=backend,
        store_path=getattr(settings, "STORE_PATH", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )
    if isinstance(kv_store, MySQLKeyValueStore) and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(kv_store.conn_factory, schema_path=SCHEMA_PATH)

    container = build_container(
        kv_store=kv_store,
        session_store=FlaskSessionStore(),
        login_delay_seconds=float(getattr(settings, "LOGIN_DELAY_SECONDS", DEFAULT_LOGIN_DELAY_SECONDS)),
        seed_sample_data=bool(getattr(settings, "AUTO_SEED_DATA", False)),
    )
    app.extensions["work_tracker"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_timesheet(app, container)

    logger.info("work-tracker started (settings=%s, store=%s)", settings_module, backend)
    return app
