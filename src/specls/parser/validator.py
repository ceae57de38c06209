"""Parse API description text and run structural presence checks.

:class:`OpenAPIParser` is the parse boundary of specls: whatever goes wrong
while decoding or checking a document comes back as a
:class:`~specls.models.ParserResult`, never as an exception. The checks are
presence checks only:

* the document declares ``openapi`` (or the legacy ``swagger``) version,
* it has an ``info`` section,
* ``info`` has a ``title`` and a ``version``.

Each parse gets its own :class:`~specls.parser.diagnostics.DiagnosticCollector`,
so nothing leaks from one call into the next.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specls.exceptions import SpeclsError
from specls.grammar.builder import GrammarBuilder
from specls.grammar.queries import error_nodes, top_level_pair
from specls.grammar.tree import SyntaxNode, SyntaxTree
from specls.models import (
    Diagnostic,
    DiagnosticCategory,
    ParserResult,
    Severity,
)
from specls.parser.diagnostics import DiagnosticCollector
from specls.parser.loader import decode, detect_format
from specls.parser.values import as_mapping

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "specls"


class OpenAPIParser:
    """Decode a document and collect structural diagnostics.

    Args:
        check_syntax: Also report the grammar's error nodes as positioned
            syntax diagnostics (tagged :attr:`DiagnosticCategory.SYNTAX`).
            Only applies when the text decoded successfully.
        source: Value for each diagnostic's ``source`` field.
        grammar: Builder used to locate findings in the text. A private one
            is created when omitted.
    """

    def __init__(
        self,
        check_syntax: bool = False,
        source: str = DEFAULT_SOURCE,
        grammar: Optional[GrammarBuilder] = None,
    ) -> None:
        self.check_syntax = check_syntax
        self.source = source
        self._grammar = grammar or GrammarBuilder()

    def parse(self, text: str) -> ParserResult:
        """Parse *text* and validate it.

        Returns:
            A :class:`~specls.models.ParserResult`. ``is_valid`` is ``True``
            iff no diagnostics were collected. When the text cannot be
            decoded (or its root is not a mapping) ``errors`` holds the
            message and ``document``/``diagnostics`` are ``None``.
        """
        fmt = detect_format(text)
        try:
            document = decode(text, fmt)
            root = as_mapping(document, "$")
            tree = self._grammar.parse(text, fmt)

            collector = DiagnosticCollector()
            self._check_presence(root, tree, collector)
            if self.check_syntax:
                self._check_syntax(tree, collector)
        except SpeclsError as exc:
            logger.debug("Document rejected: %s", exc)
            return ParserResult(is_valid=False, errors=[str(exc)], format=fmt)
        except Exception as exc:
            logger.exception("Unexpected failure while parsing document")
            return ParserResult(
                is_valid=False,
                errors=[f"{type(exc).__name__}: {exc}"],
                format=fmt,
            )

        diagnostics = collector.diagnostics()
        return ParserResult(
            is_valid=not diagnostics,
            document=document,
            diagnostics=diagnostics,
            format=fmt,
        )

    # ------------------------------------------------------------------ #
    # Checks
    # ------------------------------------------------------------------ #

    def _check_presence(
        self,
        root: dict[str, Any],
        tree: SyntaxTree,
        collector: DiagnosticCollector,
    ) -> None:
        if not root.get("openapi") and not root.get("swagger"):
            collector.add(
                self._diagnostic("Missing required field: openapi (or swagger)")
            )

        if "info" not in root or root["info"] is None:
            collector.add(self._diagnostic("Missing required field: info"))
            return

        section = root["info"] if isinstance(root["info"], dict) else {}
        info_pair = top_level_pair(tree, "info")
        for field in ("title", "version"):
            if section.get(field) in (None, ""):
                collector.add(
                    self._diagnostic(f"Missing required field: info.{field}", info_pair)
                )

    def _check_syntax(self, tree: SyntaxTree, collector: DiagnosticCollector) -> None:
        for node in error_nodes(tree):
            parent = tree.parent_of(node)
            # Report only the outermost error of a nested region
            if parent is not None and _inside_error(tree, parent):
                continue
            if node.is_missing:
                message = f"Syntax error: missing '{node.kind}'"
            else:
                message = "Syntax error: unexpected content"
            collector.add(self._diagnostic(message, node), DiagnosticCategory.SYNTAX)

    def _diagnostic(self, message: str, node: Optional[SyntaxNode] = None) -> Diagnostic:
        if node is None:
            return Diagnostic(message=message, severity=Severity.ERROR, source=self.source)
        return Diagnostic(
            message=message,
            severity=Severity.ERROR,
            source=self.source,
            line=node.start.row,
            column=node.start.column,
            start_offset=node.start_offset,
            end_offset=node.end_offset,
        )


def _inside_error(tree: SyntaxTree, node: SyntaxNode) -> bool:
    current: Optional[SyntaxNode] = node
    while current is not None:
        if current.is_error:
            return True
        current = tree.parent_of(current)
    return False
