"""Translate the Swagger ``nullable`` extension into plain JSON Schema.

Swagger 2.0 has no way to say "this value may be null"; documents use the
``x-nullable`` (or bare ``nullable``) vendor extension instead. JSON Schema
expresses the same thing structurally:

* ``{"type": "string", "nullable": true}`` becomes
  ``{"type": ["string", "null"], "nullable": true}``. The marker is left in
  place; validators ignore unknown keywords.
* ``{"$ref": "#/definitions/Foo", "nullable": true}`` becomes
  ``{"oneOf": [{"type": "null"}, {"$ref": "#/definitions/Foo"}]}``. The
  marker is dropped with the ``$ref``, since a ``$ref`` object's siblings are
  ignored by draft 4 validators anyway.

The rewrite walks the whole value depth-first, so definitions nested inside
other definitions are normalised before ``$ref`` resolution runs. Rewritten
objects no longer match either rule, which makes the transform idempotent.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

DEFAULT_NULLABLE_KEYS = ("nullable", "x-nullable")


def swagger_nullable_to_json_schema(
    schema: Any, nullable_keys: Iterable[str] = DEFAULT_NULLABLE_KEYS
) -> Any:
    """Return a copy of *schema* with every nullable marker rewritten.

    Args:
        schema: Any JSON value: a schema object, a mapping of named schemas
            (``definitions``, ``properties``), a list, or a scalar.
        nullable_keys: Keys whose ``true`` value marks an object as
            null-permitting.

    Returns:
        The rewritten value. *schema* itself is never modified.
    """
    keys = tuple(nullable_keys)
    return _rewrite(schema, keys)


def _rewrite(schema: Any, keys: tuple[str, ...]) -> Any:
    if isinstance(schema, dict):
        if _is_nullable_type(schema, keys):
            return _rewrite({**schema, "type": [schema["type"], "null"]}, keys)
        if _is_nullable_ref(schema, keys):
            return _rewrite(_wrap_ref(schema, keys), keys)
        return {key: _rewrite(value, keys) for key, value in schema.items()}

    if isinstance(schema, list):
        return [_rewrite(item, keys) for item in schema]

    return schema


def _marked_nullable(schema: dict[str, Any], keys: tuple[str, ...]) -> bool:
    return any(schema.get(key) is True for key in keys)


def _is_nullable_type(schema: dict[str, Any], keys: tuple[str, ...]) -> bool:
    return isinstance(schema.get("type"), str) and _marked_nullable(schema, keys)


def _is_nullable_ref(schema: dict[str, Any], keys: tuple[str, ...]) -> bool:
    return isinstance(schema.get("$ref"), str) and _marked_nullable(schema, keys)


def _wrap_ref(schema: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    """Replace ``$ref`` + marker with a ``oneOf`` admitting null."""
    wrapped = {k: v for k, v in schema.items() if k != "$ref" and k not in keys}
    wrapped["oneOf"] = [{"type": "null"}, {"$ref": schema["$ref"]}]
    return wrapped
