"""Shared test fixtures for swagger_validator.

Provides reusable fixtures for loading Swagger fixtures, fresh lookup
tables, and isolated configuration environments. These fixtures are
automatically discovered by pytest and available to all test modules.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from swagger_validator.output import reset_output
from swagger_validator.store import MemorySchemaStore
from swagger_validator.validator import SwaggerValidator, reset_validator


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals_between_tests() -> None:
    """Drop the process-wide validator and output manager after every test.

    The module-level ``parse_swagger_schema``/``validate`` functions share one
    lookup table; resetting keeps tests from seeing each other's keys.
    """
    yield
    reset_validator()
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def person_path() -> Path:
    return FIXTURES_DIR / "person.json"


@pytest.fixture
def pets_path() -> Path:
    return FIXTURES_DIR / "pets.yaml"


@pytest.fixture
def person_raw(person_path: Path) -> dict[str, Any]:
    """Load the raw people API document."""
    with open(person_path) as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Store and validator fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> MemorySchemaStore:
    """A fresh, empty in-memory lookup table."""
    return MemorySchemaStore()


@pytest.fixture
def validator(store: MemorySchemaStore) -> SwaggerValidator:
    """A validator over the ``store`` fixture, with default configuration."""
    return SwaggerValidator(store=store)


@pytest.fixture
def person_validator(validator: SwaggerValidator, person_path: Path) -> SwaggerValidator:
    """A validator with the people API already compiled."""
    validator.parse_swagger_schema(str(person_path))
    return validator


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CACHE_HOME into tmp_path, clears all SWAGGER_VALIDATOR_*
    environment variables and changes the working directory to tmp_path so
    no project file leaks in.
    """
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for var in [
        "SWAGGER_VALIDATOR_DRAFT",
        "SWAGGER_VALIDATOR_STORE",
        "SWAGGER_VALIDATOR_STORE_DIR",
        "SWAGGER_VALIDATOR_CHECK_FORMATS",
        "SWAGGER_VALIDATOR_NULLABLE_KEYS",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
