from __future__ import annotations

from typing import Iterable, Optional, Protocol


class KeyValueStore(Protocol):
    """Persistent string key-value store (JSON text values).

    Note (DIP): the record store and session service depend on this interface,
    not on a concrete backend (memory, JSON file, MySQL, Flask session).
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> Iterable[str]:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store; state lives as long as the object."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._data)
