"""Thread-safe in-memory lookup table (the default backend)."""

from __future__ import annotations

import threading
from typing import Iterator, Optional

from swagger_validator.models import SchemaEntry


class MemorySchemaStore:
    """Dict-backed store guarded by a re-entrant lock.

    Entries are immutable :class:`~swagger_validator.models.SchemaEntry`
    objects, so a reader either sees the previous entry for a key or the new
    one, never a mix. Nothing survives the process.

    Example::

        store = MemorySchemaStore()
        store.put("/get/person", SchemaEntry(base_path="/v1", compiled={...}))
        store.get("/get/person").base_path  # "/v1"
    """

    def __init__(self) -> None:
        self._entries: dict[str, SchemaEntry] = {}
        self._lock = threading.RLock()

    def put(self, key: str, entry: SchemaEntry) -> None:
        with self._lock:
            self._entries[key] = entry

    def get(self, key: str) -> Optional[SchemaEntry]:
        with self._lock:
            return self._entries.get(key)

    def keys(self) -> Iterator[str]:
        """Iterate over a snapshot of the registered keys."""
        with self._lock:
            snapshot = list(self._entries)
        return iter(snapshot)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
