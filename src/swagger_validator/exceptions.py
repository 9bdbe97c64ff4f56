"""Exception hierarchy for swagger_validator.

All exceptions inherit from :class:`SwaggerValidatorError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`swagger_validator.exit_codes`. The CLI catches ``SwaggerValidatorError``
and exits with the matching code.

Only authoring and environment problems are exceptions. A lookup miss or a
failed parameter check is ordinary data returned by
:meth:`~swagger_validator.validator.SwaggerValidator.validate`.

Subclass hierarchy::

    SwaggerValidatorError  (exit 1)
    +-- InvalidUsageError  (exit 2)
    +-- SpecParseError     (exit 7)
    +-- SchemaCompileError (exit 8)
    +-- ConfigError        (exit 1)
"""

from swagger_validator.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SCHEMA_COMPILE_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SwaggerValidatorError(Exception):
    """Base exception for all swagger_validator errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SwaggerValidatorError):
    """Raised for invalid CLI arguments (e.g. ``--params`` that is not JSON)."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SwaggerValidatorError):
    """Raised when a Swagger document cannot be read, fetched, or decoded."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class SchemaCompileError(SwaggerValidatorError):
    """Raised when a decoded document cannot be compiled into JSON Schema.

    Covers unresolvable ``$ref`` pointers and body parameters that name a
    missing definition. These are authoring errors and are never recovered.
    """

    exit_code = EXIT_SCHEMA_COMPILE_ERROR


class ConfigError(SwaggerValidatorError):
    """Raised for configuration problems (invalid project file, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE
