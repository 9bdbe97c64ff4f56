"""swagger_validator -- validate request parameters against Swagger 2.0 documents.

The package compiles one or more Swagger 2.0 documents into one JSON Schema
per ``(method, path)`` operation, stores them in a lookup table keyed by
``"/" + method + path``, and checks request parameters against them with
:mod:`jsonschema`.

Typical usage::

    from swagger_validator import parse_swagger_schema, validate

    parse_swagger_schema("priv/static/swagger.json")
    validate("/post/person", {"name": "Ada", "age": 36})   # Ok()
    validate("/get/unknown", {})                           # ResourceNotFound(...)

Modules:
    validator: :class:`SwaggerValidator` and the module-level API.
    parser: loading, merging, nullable rewrite, ``$ref`` resolution, compiling.
    store: lookup-table backends.
    models: Pydantic models shared across the package.
    config: configuration precedence resolution.
    exceptions: exception hierarchy with exit-code mapping.
    app: the ``swagger-validator`` CLI.
"""

__version__ = "0.1.0"

from swagger_validator.models import InvalidParams, Ok, ResourceNotFound  # noqa: E402
from swagger_validator.validator import (  # noqa: E402
    SwaggerValidator,
    parse_swagger_schema,
    validate,
)

__all__ = [
    "InvalidParams",
    "Ok",
    "ResourceNotFound",
    "SwaggerValidator",
    "__version__",
    "parse_swagger_schema",
    "validate",
]
