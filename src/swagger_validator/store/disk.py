"""Disk-backed lookup table shared between processes.

Uses :mod:`diskcache` so that a pre-fork web server can compile the Swagger
documents once and let every worker process read the same table. diskcache
serialises writers with SQLite transactions, so each ``put`` is atomic for
concurrent readers.

Entries never expire; a later compile overwrites keys in place and
:meth:`DiskSchemaStore.clear` drops everything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

import diskcache

from swagger_validator.models import SchemaEntry


class DiskSchemaStore:
    """Lookup table persisted in a :class:`diskcache.Cache` directory.

    Args:
        cache_dir: Root directory. A ``schemas/`` subdirectory is created
            inside it.

    Example::

        store = DiskSchemaStore("/var/cache/my-api")
        SwaggerValidator(store=store).parse_swagger_schema("api.json")
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self._cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(str(self._cache_dir / "schemas"))

    @property
    def directory(self) -> str:
        """Filesystem location of the underlying cache."""
        return str(self._cache_dir / "schemas")

    def put(self, key: str, entry: SchemaEntry) -> None:
        self._cache.set(key, entry.model_dump())

    def get(self, key: str) -> Optional[SchemaEntry]:
        data = self._cache.get(key)
        if data is None:
            return None
        return SchemaEntry.model_validate(data)

    def keys(self) -> Iterator[str]:
        return iter(list(self._cache.iterkeys()))

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        self._cache.close()

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)
