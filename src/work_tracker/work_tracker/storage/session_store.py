from __future__ import annotations

from typing import Iterable, Optional

from flask import session

from .kv import KeyValueStore


class FlaskSessionStore(KeyValueStore):
    """Expose the signed Flask session cookie as a key-value store.

    Only usable inside a request context; values live in the browser.
    """

    def get(self, key: str) -> Optional[str]:
        value = session.get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        session[key] = str(value)

    def remove(self, key: str) -> None:
        session.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(session.keys())
