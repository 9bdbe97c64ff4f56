"""The interface every lookup-table backend implements."""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, runtime_checkable

from swagger_validator.models import SchemaEntry


@runtime_checkable
class SchemaStore(Protocol):
    """Key/value map from a lookup key (``"/get/person"``) to a :class:`SchemaEntry`.

    Written by :func:`~swagger_validator.parser.compiler.compile_schemas`,
    read by :class:`~swagger_validator.validator.SwaggerValidator`. A ``put``
    for an existing key overwrites it in place.
    """

    def put(self, key: str, entry: SchemaEntry) -> None: ...

    def get(self, key: str) -> Optional[SchemaEntry]: ...

    def keys(self) -> Iterator[str]: ...

    def clear(self) -> None: ...

    def __contains__(self, key: object) -> bool: ...

    def __len__(self) -> int: ...
