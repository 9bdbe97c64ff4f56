"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific outcome of the ``swagger-validator`` CLI.
Exceptions from :mod:`swagger_validator.exceptions` carry one of these codes,
and the ``validate`` command maps its result objects onto them so shell
wrappers can branch without parsing output.

Example::

    $ swagger-validator validate api.json --key /get/person --params '{"age": "x"}'
    $ echo $?
    5   # EXIT_INVALID_PARAMS -- the parameters failed the compiled schema
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_RESOURCE_NOT_FOUND = 4
"""No compiled schema is registered under the requested lookup key."""

EXIT_INVALID_PARAMS = 5
"""The parameters did not satisfy the compiled schema."""

EXIT_SPEC_PARSE_ERROR = 7
"""A Swagger document could not be read or decoded."""

EXIT_SCHEMA_COMPILE_ERROR = 8
"""A Swagger document was decoded but could not be compiled (bad ``$ref``, missing definition)."""
