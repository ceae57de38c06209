"""Terminal output for the ``check`` and ``inspect`` commands.

Data goes to stdout, messages go to stderr. Three renderings exist:

* **rich** -- styled tables, chosen automatically on an interactive terminal.
* **plain** -- tab-separated lines that survive ``cut`` and ``grep``.
* **json** -- one JSON document per command, for scripts and CI.

Outside rich mode, stderr messages are written unwrapped and uncoloured so a
long document path never splits a message across lines.

The language server never imports this module: in stdio mode stdout carries
the protocol stream.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from specls.models import Diagnostic, Severity


class OutputFormat(str, Enum):
    """Rendering of command output. ``AUTO`` resolves to ``RICH`` or ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


_SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

DIAGNOSTIC_HEADERS = ["Severity", "Line", "Column", "Message"]


def _one_based(value: Optional[int]) -> Optional[int]:
    return None if value is None else value + 1


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


class OutputManager:
    """Renders command results in the selected format.

    Args:
        format: Requested format. ``AUTO`` picks rich on a colour-capable
            terminal and plain text otherwise.
        no_color: Disable colour and markup.
        quiet: Drop informational and success messages.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=self.is_rich)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_rich(self) -> bool:
        return self._format == OutputFormat.RICH

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # --- stdout ---

    def _emit(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def _emit_json(self, data: Any) -> None:
        self._emit(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[Any]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows under *headers*.

        JSON mode prints a list of objects keyed by header; plain mode prints
        a header line and one tab-separated line per row. *title* is only
        shown in rich mode. ``None`` cells render as ``-`` outside JSON.
        """
        if self._format == OutputFormat.JSON:
            self._emit_json([dict(zip(headers, row)) for row in rows])
            return
        if self._format == OutputFormat.PLAIN:
            self._emit("\t".join(headers))
            for row in rows:
                self._emit("\t".join(_cell(value) for value in row))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(_cell(value) for value in row))
        self._stdout.print(table)

    def print_diagnostics(self, source: str, diagnostics: list[Diagnostic]) -> None:
        """Print *diagnostics* found in *source*, positions shown one-based.

        A diagnostic without a position shows ``-`` (``null`` in JSON).
        """
        if self._format == OutputFormat.JSON:
            self._emit_json([
                {
                    "severity": d.severity.value,
                    "line": _one_based(d.line),
                    "column": _one_based(d.column),
                    "message": d.message,
                    "source": d.source,
                }
                for d in diagnostics
            ])
            return

        rows: list[list[Any]] = []
        for d in diagnostics:
            severity = d.severity.value
            if self.is_rich and not self._no_color:
                severity = f"[{_SEVERITY_STYLES[d.severity]}]{severity}[/]"
            rows.append([severity, _one_based(d.line), _one_based(d.column), d.message])
        self.print_table(
            DIAGNOSTIC_HEADERS,
            rows,
            title=f"{source} -- Diagnostics ({len(diagnostics)})",
        )

    def print_record(self, record: dict[str, Any], title: Optional[str] = None) -> None:
        """Print a flat ``field -> value`` record, such as the API summary.

        Lists are joined with ``", "`` outside JSON mode.
        """
        if self._format == OutputFormat.JSON:
            self._emit_json(record)
        elif self._format == OutputFormat.PLAIN:
            for key, value in record.items():
                self._emit(f"{key}\t{_cell(value)}")
        else:
            table = Table(title=title, show_header=False, box=None)
            table.add_column(style="bold")
            table.add_column()
            for key, value in record.items():
                table.add_row(key, _cell(value))
            self._stdout.print(table)

    # --- stderr ---

    def _message(self, text: str, prefix: str = "", style: str = "") -> None:
        if self.is_rich and not self._no_color:
            label = f"[{style}]{prefix}[/] " if prefix and style else prefix
            body = f"[{style}]{text}[/]" if style and not prefix else text
            self._stderr.print(f"{label}{body}".strip(), soft_wrap=True)
        else:
            print(f"{prefix} {text}" if prefix else text, file=sys.stderr, flush=True)

    def info(self, message: str) -> None:
        """Informational line. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._message(message)

    def success(self, message: str) -> None:
        """Positive outcome such as a clean check. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._message(message, style="green")

    def error(self, message: str) -> None:
        """Failure line. Always shown."""
        self._message(message, prefix="Error:", style="bold red")

    def debug(self, message: str) -> None:
        """Debug line, shown only with ``--verbose``."""
        if self._verbose:
            self._message(message, prefix="[debug]")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value) or ``TERM=dumb`` turn colour off."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the process-wide manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the process-wide manager. Used by the test suite."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
