"""CLI output: compiled schemas, key listings and validation results.

Data goes to stdout, diagnostics to stderr. The format is picked once per
run:

* ``JSON`` -- machine-readable documents, one per command.
* ``PLAIN`` -- tab-separated lines, stable for ``grep``/``cut``.
* ``RICH`` -- highlighted JSON and tables for an interactive terminal.

``AUTO`` resolves to ``RICH`` on a colour TTY and ``PLAIN`` otherwise.
``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` disable colour.

:class:`OutputManager` is created in
:func:`~swagger_validator.app.main_callback` and installed with
:func:`set_output`; the module-level helpers delegate to it.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from swagger_validator.models import InvalidParams, ResourceNotFound, ValidationResult


class OutputFormat(str, Enum):
    """Supported output formats."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


_STATUS_STYLE = {
    "ok": "green",
    "resource_not_exists": "yellow",
    "invalid": "bold red",
}


class OutputManager:
    """Renders this tool's data on stdout and its diagnostics on stderr.

    Args:
        format: Desired output format. ``AUTO`` resolves based on TTY
            detection.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress info and success messages on stderr. Errors are
            always shown.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet

        if format == OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        """The resolved output format."""
        return self._format

    # ------------------------------------------------------------------ #
    # Data (stdout)
    # ------------------------------------------------------------------ #

    def print_schema(self, schema: Any) -> None:
        """Print a compiled schema (or a key-to-schema map) as JSON.

        Only ``RICH`` adds syntax highlighting; the text is the same JSON in
        every format.
        """
        text = json.dumps(schema, indent=2, ensure_ascii=False)
        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self._write(text)

    def print_keys(self, entries: list[tuple[str, Optional[str]]]) -> None:
        """Print ``(lookup_key, base_path)`` pairs."""
        if self._format == OutputFormat.JSON:
            records = [{"key": key, "base_path": base} for key, base in entries]
            self._write(json.dumps(records, indent=2))
        elif self._format == OutputFormat.PLAIN:
            for key, base in entries:
                self._write(f"{key}\t{base or ''}")
        else:
            table = Table(title="Compiled operations", header_style="bold cyan")
            table.add_column("Key")
            table.add_column("Base path")
            for key, base in entries:
                table.add_row(key, base or "")
            self._stdout.print(table)

    def print_result(self, result: ValidationResult) -> None:
        """Print a validation result.

        ``PLAIN`` writes a ``status`` line, then ``key`` for a lookup miss or
        one ``<pointer>\\t<message>`` line per violation.
        """
        if self._format == OutputFormat.JSON:
            self._write(json.dumps(result.model_dump(), indent=2, ensure_ascii=False, default=str))
            return

        if self._format == OutputFormat.PLAIN:
            self._write(f"status\t{result.status}")
            if isinstance(result, ResourceNotFound):
                self._write(f"key\t{result.key}")
            for pointer, message in violations(result):
                self._write(f"{pointer}\t{message}")
            return

        style = _STATUS_STYLE.get(result.status, "bold")
        self._stdout.print(f"[{style}]{result.status}[/{style}]")
        if isinstance(result, ResourceNotFound):
            self._stdout.print(f"No schema registered for [bold]{result.key}[/bold]")
        rows = violations(result)
        if rows:
            table = Table(header_style="bold cyan")
            table.add_column("Path")
            table.add_column("Message")
            for pointer, message in rows:
                table.add_row(pointer, message)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._notify(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._notify(message, style="green")

    def error(self, message: str) -> None:
        self._notify(message, style="bold red", prefix="Error:")

    def _notify(self, message: str, style: Optional[str] = None, prefix: str = "") -> None:
        if self._no_color or style is None:
            text = f"{prefix} {message}" if prefix else message
            print(text, file=sys.stderr, flush=True)
        elif prefix:
            self._stderr.print(f"[{style}]{prefix}[/{style}] {message}")
        else:
            self._stderr.print(f"[{style}]{message}[/{style}]")

    def _write(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)


def violations(result: ValidationResult) -> list[tuple[str, str]]:
    """Return ``(pointer, message)`` pairs for an :class:`InvalidParams`.

    Both the single-error and the multi-error shape of ``detail`` are
    flattened; other results have no violations.
    """
    if not isinstance(result, InvalidParams):
        return []
    if isinstance(result.detail, list):
        return [(item["path"], item["message"]) for item in result.detail]
    return [(result.path, str(result.detail))]


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating an ``AUTO`` one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def print_schema(schema: Any) -> None:
    get_output().print_schema(schema)


def print_keys(entries: list[tuple[str, Optional[str]]]) -> None:
    get_output().print_keys(entries)


def print_result(result: ValidationResult) -> None:
    get_output().print_result(result)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)
