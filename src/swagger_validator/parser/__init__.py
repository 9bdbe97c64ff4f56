"""Swagger document parser -- load, merge, and compile into JSON Schema.

This sub-package turns one or more raw Swagger 2.0 documents into the
per-operation JSON Schemas held by a lookup table.

Typical usage::

    from swagger_validator.parser import compile_schemas, load_documents
    from swagger_validator.store import MemorySchemaStore

    store = MemorySchemaStore()
    doc = load_documents(["base.json", "people.json"])
    pairs = compile_schemas(doc, store)

Sub-modules:

* :mod:`~swagger_validator.parser.loader` -- I/O layer (URL, file, stdin),
  format detection, projection and merging.
* :mod:`~swagger_validator.parser.nullable` -- ``nullable`` to JSON Schema
  rewrite.
* :mod:`~swagger_validator.parser.resolver` -- Inlining of
  ``#/definitions/...`` references.
* :mod:`~swagger_validator.parser.compiler` -- Per-operation parameter
  flattening and lookup-table population.
"""

from swagger_validator.parser.compiler import compile_operation, compile_schemas, lookup_key
from swagger_validator.parser.loader import (
    load_documents,
    load_spec,
    read_swagger_document,
    validate_swagger_version,
)
from swagger_validator.parser.nullable import swagger_nullable_to_json_schema

__all__ = [
    "compile_operation",
    "compile_schemas",
    "load_documents",
    "load_spec",
    "lookup_key",
    "read_swagger_document",
    "swagger_nullable_to_json_schema",
    "validate_swagger_version",
]
