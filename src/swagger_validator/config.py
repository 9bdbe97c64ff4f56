"""Configuration resolution with XDG paths and a precedence chain.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.swagger-validator/`` on macOS and Windows. Only the cache directory is
  used, as the default home of
  :class:`~swagger_validator.store.DiskSchemaStore`.
* **Project config** -- an optional ``./swagger-validator.json`` holding any
  :class:`~swagger_validator.models.ValidatorConfig` field.
* **Precedence resolution** -- :func:`resolve_config` merges explicit
  overrides, environment variables, the project file and defaults.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from swagger_validator.exceptions import ConfigError
from swagger_validator.models import ValidatorConfig

_APP_NAME = "swagger-validator"
_PROJECT_CONFIG_FILENAME = "swagger-validator.json"

# environment variable -> ValidatorConfig field
_ENV_VARS = {
    "SWAGGER_VALIDATOR_DRAFT": "draft",
    "SWAGGER_VALIDATOR_STORE": "store",
    "SWAGGER_VALIDATOR_STORE_DIR": "store_dir",
    "SWAGGER_VALIDATOR_CHECK_FORMATS": "check_formats",
    "SWAGGER_VALIDATOR_NULLABLE_KEYS": "nullable_keys",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/swagger-validator/`` (default
    ``~/.cache/swagger-validator/``). On macOS/Windows:
    ``~/.swagger-validator/cache/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CACHE_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".cache"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./swagger-validator.json`` from the working directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


def _env_config() -> dict[str, Any]:
    """Collect ``SWAGGER_VALIDATOR_*`` variables that are set and non-empty."""
    values: dict[str, Any] = {}
    for var, field in _ENV_VARS.items():
        raw = os.environ.get(var)
        if not raw:
            continue
        if field == "check_formats":
            values[field] = raw.strip().lower() in ("1", "true", "yes", "on")
        elif field == "nullable_keys":
            values[field] = [key.strip() for key in raw.split(",") if key.strip()]
        else:
            values[field] = raw
    return values


# --- Precedence resolution ---


def resolve_config(**overrides: Any) -> ValidatorConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. Keyword overrides whose value is not ``None``
        2. Environment variables (``SWAGGER_VALIDATOR_DRAFT``, ...)
        3. Project config (``./swagger-validator.json``)
        4. Defaults

    Raises:
        ConfigError: If the project file is invalid or the merged values fail
            validation.
    """
    merged: dict[str, Any] = {}
    project = load_project_config()
    if project is not None:
        merged.update(project)
    merged.update(_env_config())
    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ValidatorConfig.model_validate(merged)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
