"""Typer application and CLI entry point for swagger-validator.

The CLI is a developer aid over the library API: it compiles Swagger
documents into a fresh in-memory lookup table on every run and either lists
the result, prints one schema, or checks a parameter payload.

Commands::

    swagger-validator compile api.json extra.yaml
    swagger-validator show api.json --key /get/person
    swagger-validator validate api.json --key /get/person --params '{"age": 5}'

:func:`main` is the console-script entry point declared in
``pyproject.toml``. Library errors are reported on stderr and mapped to the
exit codes in :mod:`swagger_validator.exit_codes`.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

import typer

from swagger_validator import __version__
from swagger_validator.exceptions import InvalidUsageError, SwaggerValidatorError
from swagger_validator.exit_codes import (
    EXIT_INVALID_PARAMS,
    EXIT_RESOURCE_NOT_FOUND,
    EXIT_SUCCESS,
)
from swagger_validator.models import InvalidParams, ResourceNotFound
from swagger_validator.output import (
    OutputFormat,
    OutputManager,
    error,
    get_output,
    info,
    print_keys,
    print_result,
    print_schema,
    set_output,
    success,
)
from swagger_validator.store import MemorySchemaStore
from swagger_validator.validator import SwaggerValidator


app = typer.Typer(
    name="swagger-validator",
    help="Compile Swagger 2.0 documents into JSON Schemas and validate request parameters.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"swagger-validator {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Install the output manager and logging level before any sub-command."""
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_validator(specs: list[str], draft: Optional[str] = None) -> SwaggerValidator:
    """Compile *specs* into a fresh in-memory validator, exiting on library errors."""
    from swagger_validator.config import resolve_config

    try:
        validator = SwaggerValidator(
            store=MemorySchemaStore(), config=resolve_config(draft=draft)
        )
        validator.parse_swagger_schema(specs)
    except SwaggerValidatorError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    return validator


def _parse_params(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"--params is not valid JSON: {exc}") from exc


@app.command("compile")
def compile_command(
    specs: list[str] = typer.Argument(..., help="Swagger files or URLs, merged in order."),
) -> None:
    """List every compiled operation key with its base path.

    With ``--json`` the compiled schemas themselves are printed.
    """
    validator = _build_validator(specs)
    keys = sorted(validator.store.keys())

    if get_output().format == OutputFormat.JSON:
        print_schema({key: validator.schema(key) for key in keys})
    else:
        print_keys([(key, validator.base_path(key)) for key in keys])
    info(f"{len(keys)} operation(s) compiled")


@app.command("show")
def show_command(
    specs: list[str] = typer.Argument(..., help="Swagger files or URLs, merged in order."),
    key: str = typer.Option(..., "--key", "-k", help="Lookup key, e.g. /get/person."),
) -> None:
    """Print the compiled schema registered under a key."""
    validator = _build_validator(specs)
    schema = validator.schema(key)
    if schema is None:
        error(f"No schema registered for {key}")
        raise typer.Exit(code=EXIT_RESOURCE_NOT_FOUND)
    print_schema(schema)


@app.command("validate")
def validate_command(
    specs: list[str] = typer.Argument(..., help="Swagger files or URLs, merged in order."),
    key: str = typer.Option(..., "--key", "-k", help="Lookup key, e.g. /get/person."),
    params: str = typer.Option("{}", "--params", help="Parameters as a JSON document."),
    draft: Optional[str] = typer.Option(
        None, "--draft", help="JSON Schema draft: draft4, draft6 or draft7."
    ),
) -> None:
    """Validate a parameter payload against a compiled operation.

    Exits 0 when valid, 4 when the key is unknown, 5 when the payload is
    invalid.
    """
    try:
        payload = _parse_params(params)
    except InvalidUsageError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    validator = _build_validator(specs, draft=draft)
    result = validator.validate(key, payload)
    print_result(result)

    if isinstance(result, ResourceNotFound):
        error(f"No schema registered for {key}")
        raise typer.Exit(code=EXIT_RESOURCE_NOT_FOUND)
    if isinstance(result, InvalidParams):
        raise typer.Exit(code=EXIT_INVALID_PARAMS)
    success("Parameters are valid")
    raise typer.Exit(code=EXIT_SUCCESS)


def main() -> None:
    """Console-script entry point."""
    app()
