"""Inline ``#/definitions/...`` references inside a compiled schema.

Swagger 2.0 documents point at reusable models with
``{"$ref": "#/definitions/<Name>"}``. A compiled schema carries the
document's ``definitions`` next to its ``properties``, so every such pointer
can be replaced by a copy of the named definition, leaving a schema that
reads on its own.

A definition that refers back to itself (directly or through others) is
expanded once per branch; the inner reference stays a ``$ref``. The
``definitions`` section is kept in the schema, so :mod:`jsonschema` follows
the remaining pointer at validation time.

Other pointers (``#/parameters/...``, ``other.json#/...``, deep pointers
into a definition) are not part of the compiled schema and raise
:class:`~swagger_validator.exceptions.SchemaCompileError`.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from swagger_validator.exceptions import SchemaCompileError

DEFINITIONS_PREFIX = "#/definitions/"


def resolve_refs(schema: dict[str, Any], origin: Optional[str] = None) -> dict[str, Any]:
    """Return a copy of *schema* with every definition reference inlined.

    Args:
        schema: A compiled schema object (``type``, ``properties``,
            ``definitions``, ``parameters``). Not modified.
        origin: Lookup key the schema is compiled for, used in error
            messages.

    Raises:
        SchemaCompileError: If a ``$ref`` is not a ``#/definitions/<Name>``
            pointer or names a definition the schema does not carry.

    Example::

        resolved = resolve_refs({
            "properties": {"owner": {"$ref": "#/definitions/Person"}},
            "definitions": {"Person": {"type": "object"}},
        })
        resolved["properties"]["owner"]  # {"type": "object"}
    """
    definitions = schema.get("definitions") or {}
    inliner = _DefinitionInliner(definitions, origin or "schema")
    return inliner.inline(schema, expanding=())


def definition_name(ref: str) -> Optional[str]:
    """Return the definition name a ``#/definitions/<Name>`` pointer names.

    ``~1`` and ``~0`` are unescaped to ``/`` and ``~``. Returns ``None`` for
    any other pointer.

    Example::

        definition_name("#/definitions/Person")   # "Person"
        definition_name("#/parameters/limit")     # None
    """
    if not ref.startswith(DEFINITIONS_PREFIX):
        return None
    name = ref[len(DEFINITIONS_PREFIX):]
    if not name or "/" in name:
        return None
    return name.replace("~1", "/").replace("~0", "~")


class _DefinitionInliner:
    def __init__(self, definitions: dict[str, Any], origin: str) -> None:
        self._definitions = definitions
        self._origin = origin

    def inline(self, node: Any, expanding: tuple[str, ...]) -> Any:
        """Copy *node*, replacing references to definitions not in *expanding*."""
        if isinstance(node, list):
            return [self.inline(item, expanding) for item in node]
        if not isinstance(node, dict):
            return node

        ref = node.get("$ref")
        # A property literally named "$ref" maps to a schema, not a string
        if not isinstance(ref, str):
            return {key: self.inline(value, expanding) for key, value in node.items()}

        name = self._lookup(ref)
        if name in expanding:
            return copy.deepcopy(node)
        return self.inline(self._definitions[name], expanding + (name,))

    def _lookup(self, ref: str) -> str:
        name = definition_name(ref)
        if name is None:
            raise SchemaCompileError(
                f"{self._origin}: unsupported $ref '{ref}'; "
                f"only '{DEFINITIONS_PREFIX}<Name>' pointers can be inlined"
            )
        if name not in self._definitions:
            raise SchemaCompileError(
                f"{self._origin}: $ref '{ref}' names unknown definition '{name}'"
            )
        return name
