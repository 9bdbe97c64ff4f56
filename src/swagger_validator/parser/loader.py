"""Load Swagger 2.0 documents from a URL, local file, stdin, or memory.

This module handles all I/O for fetching raw Swagger documents and reducing
them to the :class:`~swagger_validator.models.SwaggerDocument` the compiler
works on. JSON and YAML are both accepted with automatic format detection.

The public functions are:

* :func:`load_spec` -- Load and decode a document from any supported source.
* :func:`validate_swagger_version` -- Reject OpenAPI 3.x documents.
* :func:`read_swagger_document` -- Load one source and keep only
  ``basePath``, ``paths`` and ``definitions``.
* :func:`load_documents` -- Read one or more sources and fold them into a
  single document.

Every read or decode failure surfaces as
:class:`~swagger_validator.exceptions.SpecParseError`; nothing is retried.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Union

import httpx
import yaml

from swagger_validator.exceptions import SpecParseError
from swagger_validator.models import SwaggerDocument

logger = logging.getLogger(__name__)

SpecSource = Union[str, Path, Mapping[str, Any]]

_RETAINED_KEYS = ("basePath", "paths", "definitions")


def load_spec(source: str | Path) -> dict[str, Any]:
    """Load a Swagger document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The decoded document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be loaded or decoded.
    """
    if isinstance(source, Path):
        return _load_from_file(str(source))
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin.

    Raises:
        SpecParseError: If stdin is empty or content cannot be decoded.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document from URL. Supports JSON and YAML responses.

    Raises:
        SpecParseError: If the URL cannot be fetched or content cannot be decoded.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    The extension (``.json``, ``.yaml``, ``.yml``) is used as a format hint;
    anything else falls back to content-based detection.

    Raises:
        SpecParseError: If the file cannot be read or content cannot be decoded.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Decode content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Raises:
        SpecParseError: If the content cannot be decoded as either format,
            or does not decode to an object.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
            if not isinstance(result, dict):
                raise SpecParseError(
                    "Spec must be a JSON/YAML object (got "
                    f"{type(result).__name__})"
                )
            return result
        except json.JSONDecodeError as exc:
            json_error = exc
            # An explicit .json source is not retried as YAML
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc

    try:
        result = yaml.safe_load(content)
        if not isinstance(result, dict):
            raise SpecParseError(
                "Spec must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def validate_swagger_version(spec: Mapping[str, Any]) -> str | None:
    """Check that *spec* is not an OpenAPI 3.x document.

    Documents without a ``swagger`` field are accepted: split specs often
    carry only ``paths`` or ``definitions``.

    Returns:
        The declared ``swagger`` version string, or ``None`` if undeclared.

    Raises:
        SpecParseError: If the document declares an ``openapi`` version.
    """
    if "openapi" in spec:
        raise SpecParseError(
            f"OpenAPI {spec['openapi']} is not supported. "
            "Only Swagger 2.0 documents can be compiled."
        )

    version = spec.get("swagger")
    if version is None:
        return None
    version_str = str(version)
    if not version_str.startswith("2."):
        logger.warning("Unexpected swagger version %s, compiling anyway", version_str)
    return version_str


def read_swagger_document(source: SpecSource) -> SwaggerDocument:
    """Load one source and project it onto ``basePath``/``paths``/``definitions``.

    Args:
        source: Anything :func:`load_spec` accepts, or an already-decoded
            mapping.

    Returns:
        The projected :class:`~swagger_validator.models.SwaggerDocument`.

    Raises:
        SpecParseError: If the source cannot be loaded, is OpenAPI 3.x, or a
            retained key has the wrong shape.
    """
    if isinstance(source, Mapping):
        raw: Mapping[str, Any] = source
    else:
        raw = load_spec(source)

    validate_swagger_version(raw)
    projected = {key: raw[key] for key in _RETAINED_KEYS if key in raw}
    try:
        return SwaggerDocument.model_validate(projected)
    except ValueError as exc:
        raise SpecParseError(f"Malformed Swagger document: {exc}") from exc


def load_documents(sources: SpecSource | Sequence[SpecSource]) -> SwaggerDocument:
    """Read one or more sources and merge them into a single document.

    Sources are folded left to right with
    :meth:`~swagger_validator.models.SwaggerDocument.merge`, so on a path or
    definition collision the later document wins.

    Example::

        doc = load_documents(["base.json", "people.yaml"])
        sorted(doc.paths)  # paths of both files
    """
    if isinstance(sources, (str, Path, Mapping)):
        return read_swagger_document(sources)

    merged = SwaggerDocument()
    for source in sources:
        document = read_swagger_document(source)
        merged = merged.merge(document)
        logger.debug(
            "Merged %s (%d paths, %d definitions)",
            source if not isinstance(source, Mapping) else "<mapping>",
            len(document.paths or {}),
            len(document.definitions or {}),
        )
    return merged
