"""Validate request parameters against compiled Swagger schemas.

The module exposes two layers:

1. :class:`SwaggerValidator` -- owns a lookup table
   (:class:`~swagger_validator.store.SchemaStore`) and a
   :class:`~swagger_validator.models.ValidatorConfig`. Applications create one
   at startup, call :meth:`~SwaggerValidator.parse_swagger_schema` once, then
   :meth:`~SwaggerValidator.validate` per request.
2. Module-level :func:`parse_swagger_schema` and :func:`validate` that
   delegate to a process-wide default instance, so simple callers never
   pass a validator around.

Validation itself is delegated to :mod:`jsonschema`. Its outcome is always
returned as a result object (:class:`~swagger_validator.models.Ok`,
:class:`~swagger_validator.models.ResourceNotFound`, or
:class:`~swagger_validator.models.InvalidParams`); only authoring errors in
the Swagger documents raise.

Example::

    from swagger_validator import parse_swagger_schema, validate

    parse_swagger_schema(["api.json", "admin.json"])
    result = validate("/get/person", {"age": 5})
    if not result.ok:
        ...
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any, Optional

from jsonschema import Draft4Validator, Draft6Validator, Draft7Validator, FormatChecker
from jsonschema.exceptions import ValidationError as SchemaViolation

from swagger_validator.models import (
    InvalidParams,
    Ok,
    ResourceNotFound,
    ValidationResult,
    ValidatorConfig,
)
from swagger_validator.parser.compiler import compile_schemas
from swagger_validator.parser.loader import SpecSource, load_documents
from swagger_validator.store import SchemaStore, create_store

logger = logging.getLogger(__name__)

_DRAFTS = {
    "draft4": Draft4Validator,
    "draft6": Draft6Validator,
    "draft7": Draft7Validator,
}


class SwaggerValidator:
    """Lookup table plus the JSON Schema engine that checks parameters against it.

    Args:
        store: The lookup table to populate and read. Defaults to the backend
            selected by ``config.store``.
        config: Validation settings. Defaults to :class:`ValidatorConfig`
            defaults.
    """

    def __init__(
        self,
        store: Optional[SchemaStore] = None,
        config: Optional[ValidatorConfig] = None,
    ) -> None:
        self._config = config if config is not None else ValidatorConfig()
        self._store = store if store is not None else create_store(self._config)
        self._validator_cls = _DRAFTS[self._config.draft]
        self._format_checker = FormatChecker() if self._config.check_formats else None

    @property
    def store(self) -> SchemaStore:
        """The lookup table this validator reads and writes."""
        return self._store

    @property
    def config(self) -> ValidatorConfig:
        """The active configuration."""
        return self._config

    def parse_swagger_schema(
        self, specs: SpecSource | Sequence[SpecSource]
    ) -> list[tuple[str, dict[str, Any]]]:
        """Load, merge and compile one or more Swagger documents.

        Every compiled operation is written to :attr:`store`, overwriting
        keys registered by an earlier call.

        Args:
            specs: A file path, URL, ``"-"``, decoded mapping, or an ordered
                sequence of those. Later documents win on collisions.

        Returns:
            ``(lookup_key, compiled_schema)`` pairs, e.g.
            ``[("/get/person", {"type": "object", "properties": {...}, ...})]``.

        Raises:
            SpecParseError: If a source cannot be read or decoded.
            SchemaCompileError: If a document references missing definitions
                or compiles to a schema the configured draft rejects.
        """
        document = load_documents(specs)
        return compile_schemas(
            document, self._store, self._config.nullable_keys, self._validator_cls
        )

    def validate(self, key: str, params: Any) -> ValidationResult:
        """Check *params* against the schema registered under *key*.

        Args:
            key: Lookup key, ``"/" + method + path`` (``"/get/person/{id}"``).
            params: The decoded request parameters.

        Returns:
            :class:`Ok`, :class:`ResourceNotFound` when *key* is not
            registered, or :class:`InvalidParams`. With a single violation
            ``path`` points at the offending value (``"#/age"``); with several
            ``detail`` lists all of them and ``path`` is *key*.
        """
        entry = self._store.get(key)
        if entry is None:
            logger.debug("No schema registered for %s", key)
            return ResourceNotFound(key=key)

        validator = self._validator_cls(entry.compiled, format_checker=self._format_checker)
        errors = sorted(
            validator.iter_errors(params),
            key=lambda e: tuple(str(p) for p in e.absolute_path),
        )
        if not errors:
            return Ok()

        if len(errors) == 1:
            error = errors[0]
            return InvalidParams(detail=error.message, path=_json_pointer(error))

        return InvalidParams(
            detail=[{"message": e.message, "path": _json_pointer(e)} for e in errors],
            path=key,
        )

    def base_path(self, key: str) -> Optional[str]:
        """Return the ``basePath`` stored with *key*, or ``None``."""
        entry = self._store.get(key)
        return entry.base_path if entry is not None else None

    def schema(self, key: str) -> Optional[dict[str, Any]]:
        """Return the compiled schema registered under *key*, or ``None``."""
        entry = self._store.get(key)
        return entry.compiled if entry is not None else None


def _json_pointer(error: SchemaViolation) -> str:
    """Render the instance location of *error* as ``#/a/0/b``."""
    parts = (str(p).replace("~", "~0").replace("/", "~1") for p in error.absolute_path)
    return "#" + "".join("/" + part for part in parts)


# ------------------------------------------------------------------ #
# Process-wide default instance
# ------------------------------------------------------------------ #

_validator: Optional[SwaggerValidator] = None
_validator_lock = threading.Lock()


def get_validator() -> SwaggerValidator:
    """Return the process-wide :class:`SwaggerValidator`.

    Created lazily from :func:`~swagger_validator.config.resolve_config` on
    first use.
    """
    global _validator
    with _validator_lock:
        if _validator is None:
            from swagger_validator.config import resolve_config

            _validator = SwaggerValidator(config=resolve_config())
        return _validator


def set_validator(validator: SwaggerValidator) -> None:
    """Install *validator* as the process-wide instance."""
    global _validator
    with _validator_lock:
        _validator = validator


def reset_validator() -> None:
    """Drop the process-wide instance. Primarily useful in test suites."""
    global _validator
    with _validator_lock:
        _validator = None


def parse_swagger_schema(
    specs: SpecSource | Sequence[SpecSource],
) -> list[tuple[str, dict[str, Any]]]:
    """Compile *specs* into the process-wide lookup table.

    See :meth:`SwaggerValidator.parse_swagger_schema`.
    """
    return get_validator().parse_swagger_schema(specs)


def validate(key: str, params: Any) -> ValidationResult:
    """Validate *params* against the process-wide lookup table.

    See :meth:`SwaggerValidator.validate`.
    """
    return get_validator().validate(key, params)
