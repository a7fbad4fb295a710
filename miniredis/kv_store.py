"""A thread-safe in-memory key-value store."""

from __future__ import annotations

import threading


class KVStore:
    """String keys mapped to string values, safe to share between threads."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if there is none."""
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        """Remove ``key``; a missing key is not an error."""
        with self._lock:
            self._data.pop(key, None)