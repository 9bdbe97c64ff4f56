"""Compile a merged Swagger document into one JSON Schema per operation.

For every ``(method, path)`` that declares ``parameters``, the compiler
builds a single object schema describing the whole parameter bag:

* body parameters (``schema: {"$ref": "#/definitions/Person"}``) contribute
  the referenced definition's keys at the top level, so ``Person``'s
  ``properties`` and ``required`` apply directly to the request params;
* primitive parameters (query, path, header, form) become one entry each in
  ``properties``, keyed by parameter name.

The document's ``definitions`` ride along in every schema. Both
``definitions`` and ``properties`` go through the nullable rewrite
(:mod:`~swagger_validator.parser.nullable`) and the result is ``$ref``-resolved
(:mod:`~swagger_validator.parser.resolver`). The result must pass the
selected draft's meta-schema before it is stored under its lookup key (see
:func:`lookup_key`); a Swagger-only ``type: "file"`` parameter, for
instance, fails here rather than at validation time.

Operations without ``parameters`` need no validation and are not
registered.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any, Optional

from jsonschema import Draft4Validator
from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator

from swagger_validator.exceptions import SchemaCompileError
from swagger_validator.models import HTTPMethod, SchemaEntry, SwaggerDocument
from swagger_validator.parser.nullable import (
    DEFAULT_NULLABLE_KEYS,
    swagger_nullable_to_json_schema,
)
from swagger_validator.parser.resolver import resolve_refs
from swagger_validator.store.base import SchemaStore

logger = logging.getLogger(__name__)

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


def lookup_key(method: str, path: str) -> str:
    """Build the lookup key for an operation.

    Example::

        lookup_key("GET", "/person/{id}")  # "/get/person/{id}"
    """
    return "/" + method.lower() + path


def compile_schemas(
    document: SwaggerDocument,
    store: SchemaStore,
    nullable_keys: Iterable[str] = DEFAULT_NULLABLE_KEYS,
    validator_cls: type[Validator] = Draft4Validator,
) -> list[tuple[str, dict[str, Any]]]:
    """Compile every operation of *document* and register it in *store*.

    Args:
        document: The merged document from
            :func:`~swagger_validator.parser.loader.load_documents`.
        store: Lookup table receiving one
            :class:`~swagger_validator.models.SchemaEntry` per operation.
            Existing keys are overwritten.
        nullable_keys: Keys that mark a schema or parameter as
            null-permitting.
        validator_cls: The :mod:`jsonschema` validator class whose
            meta-schema every compiled schema must satisfy.

    Returns:
        ``(lookup_key, compiled_schema)`` pairs in declaration order, one per
        operation that declares ``parameters``.

    Raises:
        SchemaCompileError: If a body parameter names a missing definition
            or a ``$ref`` cannot be resolved, or a compiled schema is not
            valid for *validator_cls* (e.g. a ``type: "file"`` parameter).
    """
    keys = tuple(nullable_keys)
    if document.paths is None:
        logger.info("Document declares no paths, nothing to compile")
        return []

    definitions = document.definitions or {}
    compiled: list[tuple[str, dict[str, Any]]] = []

    for path, path_item in document.paths.items():
        if not isinstance(path_item, dict):
            continue

        for method, operation in path_item.items():
            if method.lower() not in _HTTP_METHODS or not isinstance(operation, dict):
                continue

            parameters = operation.get("parameters")
            if parameters is None:
                continue

            key = lookup_key(method, path)
            schema = compile_operation(parameters, definitions, keys, origin=key)
            _check_schema(key, schema, validator_cls)
            store.put(key, SchemaEntry(base_path=document.base_path, compiled=schema))
            compiled.append((key, schema))
            logger.debug("Compiled %s (%d parameters)", key, len(parameters))

    logger.info("Compiled %d operation schemas", len(compiled))
    return compiled


def compile_operation(
    parameters: list[dict[str, Any]],
    definitions: dict[str, Any],
    nullable_keys: Iterable[str] = DEFAULT_NULLABLE_KEYS,
    origin: Optional[str] = None,
) -> dict[str, Any]:
    """Build the resolved JSON Schema for one operation's ``parameters``.

    The unresolved object is the base ``{"parameters", "type": "object",
    "definitions"}`` overlaid with the collected properties, so a body
    definition that declares its own ``type`` wins over the default.
    *origin* (the lookup key, when known) prefixes resolution errors.
    """
    keys = tuple(nullable_keys)

    properties = _collect_body_properties(parameters, definitions)
    properties = _collect_primitive_properties(parameters, properties, keys)
    properties.setdefault("type", "object")

    schema_object: dict[str, Any] = {
        "parameters": parameters,
        "type": "object",
        "definitions": definitions,
    }
    schema_object.update(properties)

    schema_object["definitions"] = swagger_nullable_to_json_schema(
        schema_object.get("definitions", {}), keys
    )
    schema_object["properties"] = swagger_nullable_to_json_schema(
        schema_object.get("properties", {}), keys
    )

    return resolve_refs(schema_object, origin)


def _check_schema(
    key: str, schema: dict[str, Any], validator_cls: type[Validator]
) -> None:
    try:
        validator_cls.check_schema(schema)
    except SchemaError as exc:
        raise SchemaCompileError(
            f"{key}: compiled schema is not valid for {validator_cls.__name__}: {exc.message}"
        ) from exc


def _collect_body_properties(
    parameters: list[dict[str, Any]], definitions: dict[str, Any]
) -> dict[str, Any]:
    """Merge the schemas of all body parameters (those without ``type``).

    A ``$ref`` is looked up by its last path segment in *definitions*; an
    inline schema is used as is. Later parameters overwrite colliding keys.
    """
    collected: dict[str, Any] = {}

    for parameter in parameters:
        if parameter.get("type") is not None:
            continue

        schema = parameter.get("schema")
        if not isinstance(schema, dict):
            raise SchemaCompileError(
                f"Parameter '{parameter.get('name', '?')}' has neither 'type' nor 'schema'"
            )

        ref = schema.get("$ref")
        if ref is None:
            fragment = schema
        else:
            if not isinstance(ref, str):
                raise SchemaCompileError(
                    f"Parameter '{parameter.get('name', '?')}' has a non-string $ref: {ref!r}"
                )
            name = ref.split("/")[-1]
            if name not in definitions:
                raise SchemaCompileError(
                    f"Parameter '{parameter.get('name', '?')}' references "
                    f"unknown definition '{name}' ({ref})"
                )
            fragment = definitions[name]

        if not isinstance(fragment, dict):
            raise SchemaCompileError(
                f"Body schema for parameter '{parameter.get('name', '?')}' is not an object"
            )
        # Copy so that adding primitive properties never touches the definition
        collected.update(copy.deepcopy(fragment))

    return collected


def _collect_primitive_properties(
    parameters: list[dict[str, Any]],
    properties: dict[str, Any],
    nullable_keys: tuple[str, ...],
) -> dict[str, Any]:
    """Add one ``properties`` entry per parameter that declares a ``type``."""
    for parameter in parameters:
        param_type = parameter.get("type")
        if param_type is None:
            continue

        if "name" not in parameter:
            raise SchemaCompileError(f"Parameter of type '{param_type}' has no 'name'")

        bag = properties.setdefault("properties", {})
        bag[parameter["name"]] = _primitive_property(parameter, nullable_keys)

    return properties


def _primitive_property(
    parameter: dict[str, Any], nullable_keys: tuple[str, ...]
) -> dict[str, Any]:
    if any(parameter.get(key) is True for key in nullable_keys):
        return {"type": [parameter["type"], "null"], "nullable": True}
    return {"type": parameter["type"]}
