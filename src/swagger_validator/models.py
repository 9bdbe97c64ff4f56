"""Canonical Pydantic models shared across all swagger_validator modules.

The models fall into three groups:

**Document models** -- produced by the loader and consumed by the compiler:
    :class:`HTTPMethod` and :class:`SwaggerDocument`.

**Store models** -- what the lookup table holds for each key:
    :class:`SchemaEntry`.

**Result models** -- returned by
:meth:`~swagger_validator.validator.SwaggerValidator.validate`:
    :class:`Ok`, :class:`ResourceNotFound`, and :class:`InvalidParams`
    (together :data:`ValidationResult`).

**Configuration** -- :class:`ValidatorConfig`, resolved by
:func:`~swagger_validator.config.resolve_config`.

All models use Pydantic v2.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Documents ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by Swagger 2.0 path-item objects.

    Any other key of a path item (``parameters``, ``$ref``, ``x-*``
    extensions) is not an operation and is skipped by the compiler.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"


class SwaggerDocument(BaseModel):
    """The part of a Swagger 2.0 document needed for request validation.

    Only ``basePath``, ``paths`` and ``definitions`` survive projection; every
    other top-level key is dropped by
    :func:`~swagger_validator.parser.loader.read_swagger_document`. An
    undeclared key is represented as ``None`` rather than an empty mapping so
    that :meth:`merge` can tell "absent" from "declared but empty".

    Example::

        doc = SwaggerDocument.model_validate(
            {"basePath": "/v1", "paths": {"/person": {...}}}
        )
        doc.base_path   # "/v1"
        doc.definitions # None
    """

    model_config = ConfigDict(populate_by_name=True)

    base_path: Optional[str] = Field(default=None, alias="basePath")
    paths: Optional[dict[str, Any]] = None
    definitions: Optional[dict[str, Any]] = None

    def merge(self, other: SwaggerDocument) -> SwaggerDocument:
        """Fold *other* into this document and return the combined result.

        Until this document has ``paths``, the merge is shallow: every field
        *other* declares replaces ours. Once ``paths`` exist, ``paths`` and
        ``definitions`` are unioned key by key with *other* winning on
        collisions, and our ``base_path`` is kept.

        Neither document is modified.
        """
        if self.paths is None:
            return SwaggerDocument(
                base_path=other.base_path if other.base_path is not None else self.base_path,
                paths=other.paths,
                definitions=(
                    other.definitions if other.definitions is not None else self.definitions
                ),
            )

        return SwaggerDocument(
            base_path=self.base_path,
            paths=_merge_maps(self.paths, other.paths),
            definitions=_merge_maps(self.definitions, other.definitions),
        )


def _merge_maps(
    first: Optional[dict[str, Any]], second: Optional[dict[str, Any]]
) -> Optional[dict[str, Any]]:
    """Key-by-key union where *second* wins. ``None`` only if both are absent."""
    if first is None and second is None:
        return None
    return {**(first or {}), **(second or {})}


# --- Store ---


class SchemaEntry(BaseModel):
    """One lookup-table value: the document's base path and the compiled schema.

    Stored as a single immutable object so that a concurrent reader never
    pairs the base path of one parse with the schema of another.
    """

    model_config = ConfigDict(frozen=True)

    base_path: Optional[str] = None
    compiled: dict[str, Any]


# --- Validation results ---


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str

    @property
    def ok(self) -> bool:
        """``True`` only for :class:`Ok`."""
        return self.status == "ok"


class Ok(_Result):
    """The parameters satisfy the compiled schema."""

    status: Literal["ok"] = "ok"


class ResourceNotFound(_Result):
    """No schema is registered under ``key``.

    Callers usually treat this as "nothing declared, skip validation" or as a
    routing error.
    """

    status: Literal["resource_not_exists"] = "resource_not_exists"
    key: str


class InvalidParams(_Result):
    """The parameters failed one or more schema constraints.

    For a single failure ``detail`` is the constraint message and ``path`` is
    the JSON pointer of the offending value (``"#/age"``). For several
    failures ``detail`` is a list of ``{"message", "path"}`` dicts and
    ``path`` falls back to the lookup key.
    """

    status: Literal["invalid"] = "invalid"
    detail: Any
    path: str


ValidationResult = Union[Ok, ResourceNotFound, InvalidParams]


# --- Configuration ---


class ValidatorConfig(BaseModel):
    """Runtime settings for :class:`~swagger_validator.validator.SwaggerValidator`.

    Resolved from overrides, environment variables, and the project file by
    :func:`~swagger_validator.config.resolve_config`.
    """

    draft: Literal["draft4", "draft6", "draft7"] = Field(
        default="draft4",
        description="JSON Schema draft used for validation (Swagger 2.0 is based on draft 4)",
    )
    check_formats: bool = Field(
        default=False, description="Enforce the 'format' keyword (date-time, email, ...)"
    )
    nullable_keys: list[str] = Field(
        default_factory=lambda: ["nullable", "x-nullable"],
        description="Schema keys that mark a value as null-permitting",
    )
    store: Literal["memory", "disk"] = Field(
        default="memory", description="Lookup table backend"
    )
    store_dir: Optional[str] = Field(
        default=None, description="Directory for the disk store (defaults to the cache dir)"
    )
