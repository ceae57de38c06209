"""Convert :class:`~specls.models.Diagnostic` objects into LSP diagnostics.

A diagnostic's editor range comes from the most precise information it
carries:

1. its ``start_offset``/``end_offset`` pair,
2. otherwise its ``line`` (and ``column``), running to the end of that line,
3. otherwise the whole document text.
"""

from __future__ import annotations

from lsprotocol import types

from specls.models import Diagnostic, Severity
from specls.query import position_at

_SEVERITIES = {
    Severity.ERROR: types.DiagnosticSeverity.Error,
    Severity.WARNING: types.DiagnosticSeverity.Warning,
    Severity.INFO: types.DiagnosticSeverity.Information,
}


def _lsp_position(text: str, offset: int) -> types.Position:
    position = position_at(text, offset)
    return types.Position(line=position.row, character=position.column)


def full_document_range(text: str) -> types.Range:
    """Range spanning the entire *text*."""
    return types.Range(start=_lsp_position(text, 0), end=_lsp_position(text, len(text)))


def diagnostic_range(text: str, diagnostic: Diagnostic) -> types.Range:
    """Derive the editor range for *diagnostic* within *text*."""
    if diagnostic.start_offset is not None:
        end_offset = diagnostic.end_offset
        if end_offset is None or end_offset < diagnostic.start_offset:
            end_offset = diagnostic.start_offset
        return types.Range(
            start=_lsp_position(text, diagnostic.start_offset),
            end=_lsp_position(text, end_offset),
        )

    if diagnostic.line is not None:
        lines = text.split("\n")
        if diagnostic.line < len(lines):
            line_text = lines[diagnostic.line].rstrip("\r")
            column = min(diagnostic.column or 0, len(line_text))
            return types.Range(
                start=types.Position(line=diagnostic.line, character=column),
                end=types.Position(line=diagnostic.line, character=len(line_text)),
            )

    return full_document_range(text)


def to_lsp_diagnostic(text: str, diagnostic: Diagnostic, default_source: str) -> types.Diagnostic:
    """Build the ``lsprotocol`` diagnostic published for *diagnostic*."""
    return types.Diagnostic(
        range=diagnostic_range(text, diagnostic),
        message=diagnostic.message,
        severity=_SEVERITIES[diagnostic.severity],
        source=diagnostic.source or default_source,
    )
