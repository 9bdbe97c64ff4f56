"""Lookup tables mapping ``"/<method><path>"`` keys to compiled schemas.

Two backends implement :class:`SchemaStore`:

* :class:`MemorySchemaStore` -- the default; a locked dict that lives as long
  as the process.
* :class:`DiskSchemaStore` -- a :mod:`diskcache` directory that several
  processes can share.

:func:`create_store` picks one from a
:class:`~swagger_validator.models.ValidatorConfig`.
"""

from __future__ import annotations

from swagger_validator.models import ValidatorConfig
from swagger_validator.store.base import SchemaStore
from swagger_validator.store.disk import DiskSchemaStore
from swagger_validator.store.memory import MemorySchemaStore


def create_store(config: ValidatorConfig) -> SchemaStore:
    """Build the store selected by ``config.store``.

    The disk store lives in ``config.store_dir`` when set, otherwise in
    :func:`~swagger_validator.config.get_cache_dir`.
    """
    if config.store == "disk":
        from swagger_validator.config import get_cache_dir

        directory = config.store_dir or get_cache_dir()
        return DiskSchemaStore(directory)
    return MemorySchemaStore()


__all__ = ["SchemaStore", "MemorySchemaStore", "DiskSchemaStore", "create_store"]
