"""Tests for swagger_validator.output.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline and quiet mode
- Schema, key listing and validation result rendering in every format
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from swagger_validator import output as output_module
from swagger_validator.models import InvalidParams, Ok, ResourceNotFound
from swagger_validator.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
    violations,
)


MULTI_ERROR = InvalidParams(
    detail=[
        {"message": "'x' is not of type 'integer'", "path": "#/age"},
        {"message": "1 is not of type 'string'", "path": "#/name"},
    ],
    path="/post/person",
)


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("swagger_validator.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("swagger_validator.output._is_tty", lambda: True)


@pytest.fixture()
def plain(non_tty) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, no_color=True)


@pytest.fixture()
def as_json(non_tty) -> OutputManager:
    return OutputManager(format=OutputFormat.JSON, no_color=True)


# ------------------------------------------------------------------ #
# Format resolution and colour
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager().format == OutputFormat.RICH

    def test_no_color_flag_forces_plain_on_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Diagnostics
# ------------------------------------------------------------------ #


class TestDiagnostics:
    def test_info_goes_to_stderr(self, capfd, plain):
        plain.info("3 operation(s) compiled")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "3 operation(s) compiled" in captured.err

    def test_error_is_prefixed(self, capfd, plain):
        plain.error("No schema registered for /get/x")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "Error: No schema registered for /get/x" in captured.err

    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_does_not_suppress_error(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.error("critical")
        assert "critical" in capfd.readouterr().err

    def test_quiet_does_not_suppress_results(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.print_result(Ok())
        assert "status\tok" in capfd.readouterr().out


# ------------------------------------------------------------------ #
# Schemas and key listings
# ------------------------------------------------------------------ #


class TestPrintSchema:
    def test_json_round_trips(self, capfd, as_json):
        schema = {"type": "object", "properties": {"age": {"type": "integer"}}}
        as_json.print_schema(schema)
        captured = capfd.readouterr()
        assert json.loads(captured.out) == schema
        assert captured.err == ""

    def test_plain_is_json_text(self, capfd, plain):
        plain.print_schema({"type": "object"})
        assert json.loads(capfd.readouterr().out) == {"type": "object"}


class TestPrintKeys:
    ENTRIES = [("/get/person", "/api"), ("/get/pet", None)]

    def test_plain_is_tab_separated(self, capfd, plain):
        plain.print_keys(self.ENTRIES)
        assert capfd.readouterr().out.splitlines() == ["/get/person\t/api", "/get/pet\t"]

    def test_json_records(self, capfd, as_json):
        as_json.print_keys(self.ENTRIES)
        assert json.loads(capfd.readouterr().out) == [
            {"key": "/get/person", "base_path": "/api"},
            {"key": "/get/pet", "base_path": None},
        ]

    def test_rich_table(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_keys(self.ENTRIES)
        out = capfd.readouterr().out
        assert "Compiled operations" in out
        assert "/get/person" in out


# ------------------------------------------------------------------ #
# Validation results
# ------------------------------------------------------------------ #


class TestViolations:
    def test_single_error(self):
        result = InvalidParams(detail="'name' is a required property", path="#")
        assert violations(result) == [("#", "'name' is a required property")]

    def test_multiple_errors(self):
        assert violations(MULTI_ERROR) == [
            ("#/age", "'x' is not of type 'integer'"),
            ("#/name", "1 is not of type 'string'"),
        ]

    def test_other_results_have_none(self):
        assert violations(Ok()) == []
        assert violations(ResourceNotFound(key="/get/x")) == []


class TestPrintResult:
    def test_plain_ok(self, capfd, plain):
        plain.print_result(Ok())
        assert capfd.readouterr().out.splitlines() == ["status\tok"]

    def test_plain_not_found(self, capfd, plain):
        plain.print_result(ResourceNotFound(key="/get/x"))
        assert capfd.readouterr().out.splitlines() == [
            "status\tresource_not_exists",
            "key\t/get/x",
        ]

    def test_plain_lists_each_violation(self, capfd, plain):
        plain.print_result(MULTI_ERROR)
        assert capfd.readouterr().out.splitlines() == [
            "status\tinvalid",
            "#/age\t'x' is not of type 'integer'",
            "#/name\t1 is not of type 'string'",
        ]

    def test_json_is_model_dump(self, capfd, as_json):
        as_json.print_result(MULTI_ERROR)
        assert json.loads(capfd.readouterr().out) == MULTI_ERROR.model_dump()

    def test_rich_shows_violation_table(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_result(InvalidParams(detail="5 is not of type 'string'", path="#/name"))
        out = capfd.readouterr().out
        assert "invalid" in out
        assert "#/name" in out
        assert "is not of type" in out


# ------------------------------------------------------------------ #
# Global instance management
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self, non_tty):
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_output_installs_instance(self, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        set_output(mgr)
        assert get_output() is mgr

    def test_module_helpers_delegate(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_result(ResourceNotFound(key="/get/y"))
        output_module.success("done")
        captured = capfd.readouterr()
        assert "key\t/get/y" in captured.out
        assert "done" in captured.err
