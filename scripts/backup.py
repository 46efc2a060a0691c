"""Back up the store.

Note: Dumps every key of the configured key-value store (memory/file/mysql)
into a timestamped JSON file under ``backups/``.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.work_tracker.work_tracker.container import build_kv_store
from src.work_tracker.work_tracker.storage.kv import KeyValueStore


def dump_store(store: KeyValueStore) -> dict[str, object]:
    out: dict[str, object] = {}
    for key in store.keys():
        raw = store.get(key)
        if raw is None:
            continue
        try:
            out[key] = json.loads(raw)
        except ValueError:
            out[key] = raw
    return out


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_kv_store(
        backend=settings.STORE_BACKEND,
        store_path=getattr(settings, "STORE_PATH", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"work_tracker_{ts}.json"
    out_file.write_text(json.dumps(dump_store(store), indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
