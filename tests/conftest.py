"""Shared test fixtures for specls.

Provides reusable fixtures for loading document fixtures, creating isolated
config environments and resetting output state.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any

import pytest
import yaml

from specls.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_yaml() -> str:
    """Raw text of the petstore YAML fixture."""
    return (FIXTURES_DIR / "petstore.yaml").read_text(encoding="utf-8")


@pytest.fixture
def petstore_doc(petstore_yaml: str) -> dict[str, Any]:
    """Decoded petstore fixture."""
    return yaml.safe_load(petstore_yaml)


@pytest.fixture
def petstore_json(petstore_doc: dict[str, Any]) -> str:
    """The petstore fixture re-serialized as indented JSON."""
    return json.dumps(petstore_doc, indent=2)


@pytest.fixture
def minimal_yaml() -> str:
    """Smallest document that passes the presence checks."""
    return textwrap.dedent("""\
        openapi: "3.1.0"
        info:
          title: Minimal
          version: "0.1.0"
        paths: {}
    """)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME at a subdirectory of tmp_path, forces the XDG
    layout, clears all SPECLS_* environment variables and changes the
    working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("specls.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ["SPECLS_LOG_LEVEL", "SPECLS_LOG_FILE", "SPECLS_CHECK_SYNTAX"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
