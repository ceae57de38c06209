"""Tests for specls.output -- rendering of check and inspect results."""

from __future__ import annotations

import json

import pytest

from specls import output as output_module
from specls.models import Diagnostic, Severity
from specls.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("specls.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("specls.output._is_tty", lambda: True)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("TERM", raising=False)


def _plain(**kwargs) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, **kwargs)


DIAGNOSTICS = [
    Diagnostic(
        message="Missing required field: info.title",
        severity=Severity.ERROR,
        line=1,
        column=0,
        source="openapi-parser",
    ),
    Diagnostic(message="Unknown section", severity=Severity.WARNING),
]


# ------------------------------------------------------------------ #
# Format selection
# ------------------------------------------------------------------ #


class TestFormatSelection:
    def test_auto_is_plain_off_terminal(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_is_rich_on_terminal(self, tty):
        mgr = OutputManager()
        assert mgr.format == OutputFormat.RICH
        assert mgr.is_rich

    def test_no_color_keeps_auto_plain(self, tty):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_format_wins(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON

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
# Messages
# ------------------------------------------------------------------ #


class TestMessages:
    @pytest.mark.parametrize("method", ["info", "success", "error"])
    def test_messages_go_to_stderr(self, capfd, non_tty, method):
        getattr(_plain(), method)("a message")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "a message" in captured.err

    def test_error_prefix(self, capfd, non_tty):
        _plain().error("broken")
        assert capfd.readouterr().err == "Error: broken\n"

    def test_long_plain_error_is_one_line(self, capfd, non_tty):
        source = "/tmp/" + "nested/" * 30 + "openapi.yaml"
        _plain().error(f"{source}: 1 problem(s) found")
        assert capfd.readouterr().err == f"Error: {source}: 1 problem(s) found\n"

    def test_long_json_mode_error_is_one_line(self, capfd, non_tty):
        message = "x" * 300
        OutputManager(format=OutputFormat.JSON).error(message)
        assert capfd.readouterr().err == f"Error: {message}\n"

    def test_plain_output_has_no_markup(self, capfd, non_tty):
        _plain().success("[bold]kept[/bold]")
        assert capfd.readouterr().err == "[bold]kept[/bold]\n"

    def test_quiet_keeps_only_errors(self, capfd, non_tty):
        mgr = _plain(quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        mgr.error("shown")
        assert capfd.readouterr().err == "Error: shown\n"

    def test_debug_needs_verbose(self, capfd, non_tty):
        _plain().debug("hidden")
        _plain(verbose=True).debug("trace")
        assert capfd.readouterr().err == "[debug] trace\n"


# ------------------------------------------------------------------ #
# Diagnostics
# ------------------------------------------------------------------ #


class TestPrintDiagnostics:
    def test_plain_rows_are_one_based(self, capfd, non_tty):
        _plain().print_diagnostics("api.yaml", DIAGNOSTICS)
        assert capfd.readouterr().out.splitlines() == [
            "Severity\tLine\tColumn\tMessage",
            "error\t2\t1\tMissing required field: info.title",
            "warning\t-\t-\tUnknown section",
        ]

    def test_json_records(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_diagnostics("api.yaml", DIAGNOSTICS)
        records = json.loads(capfd.readouterr().out)
        assert records[0] == {
            "severity": "error",
            "line": 2,
            "column": 1,
            "message": "Missing required field: info.title",
            "source": "openapi-parser",
        }
        assert records[1]["line"] is None
        assert records[1]["column"] is None

    def test_rich_table_has_title(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_diagnostics(
            "api.yaml", DIAGNOSTICS
        )
        out = capfd.readouterr().out
        assert "api.yaml -- Diagnostics (2)" in out
        assert "Unknown section" in out


# ------------------------------------------------------------------ #
# Tables and records
# ------------------------------------------------------------------ #


class TestPrintTable:
    HEADERS = ["Component", "Type"]
    ROWS = [["Pet", "schemas"], ["Error", None]]

    def test_json_keeps_nulls(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(self.HEADERS, self.ROWS)
        assert json.loads(capfd.readouterr().out) == [
            {"Component": "Pet", "Type": "schemas"},
            {"Component": "Error", "Type": None},
        ]

    def test_plain_tsv(self, capfd, non_tty):
        _plain().print_table(self.HEADERS, self.ROWS, title="ignored")
        assert capfd.readouterr().out.splitlines() == [
            "Component\tType",
            "Pet\tschemas",
            "Error\t-",
        ]


class TestPrintRecord:
    RECORD = {"title": "Petstore", "tags": ["pets", "store"], "paths": 2}

    def test_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_record(self.RECORD)
        assert json.loads(capfd.readouterr().out) == self.RECORD

    def test_plain_joins_lists(self, capfd, non_tty):
        _plain().print_record(self.RECORD)
        assert capfd.readouterr().out.splitlines() == [
            "title\tPetstore",
            "tags\tpets, store",
            "paths\t2",
        ]

    def test_rich(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_record(self.RECORD)
        out = capfd.readouterr().out
        assert "pets, store" in out


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_is_lazy_singleton(self, non_tty):
        reset_output()
        first = get_output()
        assert get_output() is first

    def test_module_helpers_delegate(self, capfd, non_tty):
        set_output(_plain())
        output_module.info("note")
        output_module.error("bad")
        assert capfd.readouterr().err == "note\nError: bad\n"
