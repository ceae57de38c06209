"""Configuration with XDG paths and precedence resolution.

This module handles the settings of the specls language server and CLI:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specls/`` on macOS and Windows. See :func:`get_config_dir`.
* **Global config** -- an optional ``config.json`` in the config directory.
* **Project config** -- an optional ``specls.json`` in the working directory.
* **Precedence resolution** -- :func:`resolve_settings` merges CLI flags,
  environment variables, project config, and global config into the final
  :class:`ServerSettings`.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from specls.exceptions import ConfigError

_APP_NAME = "specls"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "specls.json"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ServerSettings(BaseModel):
    """Effective settings for the language server and the ``check`` command."""

    check_syntax: bool = Field(
        default=True, description="Report grammar error nodes as positioned diagnostics"
    )
    diagnostic_source: str = Field(
        default="specls", description="Value of the 'source' field on published diagnostics"
    )
    log_level: str = Field(default="WARNING", description="Logging level name")
    log_file: Optional[str] = Field(
        default=None, description="Write logs to this file instead of stderr"
    )
    trigger_characters: list[str] = Field(
        default_factory=lambda: [".", '"', "'", "/"],
        description="Characters that trigger completion in the editor",
    )


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory. It is not created.

    On Linux/BSD: ``$XDG_CONFIG_HOME/specls/`` (default ``~/.config/specls/``).
    On macOS/Windows: ``~/.specls/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


# --- Config files ---


def _read_json(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} config at {path}: expected a JSON object")
    return data


def load_global_config() -> dict[str, Any]:
    """Load ``config.json`` from the config directory, or ``{}`` if absent.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json(get_config_dir() / _CONFIG_FILENAME, "global") or {}


def load_project_config() -> dict[str, Any]:
    """Load ``./specls.json`` from the working directory, or ``{}`` if absent.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project") or {}


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    level = os.environ.get("SPECLS_LOG_LEVEL")
    if level:
        overrides["log_level"] = level
    log_file = os.environ.get("SPECLS_LOG_FILE")
    if log_file:
        overrides["log_file"] = log_file
    check_syntax = os.environ.get("SPECLS_CHECK_SYNTAX")
    if check_syntax:
        lowered = check_syntax.strip().lower()
        if lowered in _TRUE_VALUES:
            overrides["check_syntax"] = True
        elif lowered in _FALSE_VALUES:
            overrides["check_syntax"] = False
        else:
            raise ConfigError(f"Invalid SPECLS_CHECK_SYNTAX value: {check_syntax!r}")
    return overrides


# --- Precedence resolution ---


def resolve_settings(cli_overrides: Optional[dict[str, Any]] = None) -> ServerSettings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_overrides``; ``None`` values are ignored)
        2. Environment variables (``SPECLS_LOG_LEVEL``, ``SPECLS_LOG_FILE``,
           ``SPECLS_CHECK_SYNTAX``)
        3. Project config (``./specls.json``)
        4. User config (``~/.config/specls/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer is malformed or the merged values fail
            validation.
    """
    merged: dict[str, Any] = {}
    merged.update(load_global_config())
    merged.update(load_project_config())
    merged.update(_env_overrides())
    if cli_overrides:
        merged.update({k: v for k, v in cli_overrides.items() if v is not None})

    try:
        return ServerSettings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
