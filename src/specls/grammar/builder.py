"""Build :class:`~specls.grammar.tree.SyntaxTree` objects with tree-sitter.

tree-sitter is error tolerant: a structurally broken document still yields a
complete tree, with ``ERROR`` nodes around the unparseable region and
zero-width *missing* nodes where a token was expected. That makes the tree
usable for position queries while the user is in the middle of an edit.

tree-sitter reports columns and offsets in UTF-8 bytes. The builder
converts them to character counts so positions line up with the Python
string the document came from.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import tree_sitter_json
import tree_sitter_yaml
from tree_sitter import Language, Parser

from specls.grammar.tree import SyntaxNode, SyntaxTree
from specls.models import DocumentFormat, Position
from specls.parser.loader import detect_format

logger = logging.getLogger(__name__)

_LANGUAGES: dict[DocumentFormat, Language] = {}


def _language(fmt: DocumentFormat) -> Language:
    if fmt not in _LANGUAGES:
        if fmt == DocumentFormat.JSON:
            _LANGUAGES[fmt] = Language(tree_sitter_json.language())
        else:
            _LANGUAGES[fmt] = Language(tree_sitter_yaml.language())
    return _LANGUAGES[fmt]


class _CharIndex:
    """Maps UTF-8 byte offsets of *text* to character offsets."""

    def __init__(self, text: str) -> None:
        self._table: Optional[list[int]] = None
        if len(text.encode("utf-8")) != len(text):
            table: list[int] = []
            for index, char in enumerate(text):
                table.extend([index] * len(char.encode("utf-8")))
            table.append(len(text))
            self._table = table

    def char(self, byte_offset: int) -> int:
        if self._table is None:
            return byte_offset
        return self._table[min(byte_offset, len(self._table) - 1)]

    def position(self, point: Any, byte_offset: int) -> Position:
        row, byte_column = point[0], point[1]
        if self._table is None:
            return Position(row, byte_column)
        column = self.char(byte_offset) - self.char(byte_offset - byte_column)
        return Position(row, column)


class GrammarBuilder:
    """Parses JSON or YAML text into a :class:`~specls.grammar.tree.SyntaxTree`.

    One builder keeps one tree-sitter parser per format and can be reused for
    any number of documents. It is not thread-safe.
    """

    def __init__(self) -> None:
        self._parsers: dict[DocumentFormat, Parser] = {}

    def _parser(self, fmt: DocumentFormat) -> Parser:
        if fmt not in self._parsers:
            self._parsers[fmt] = Parser(_language(fmt))
        return self._parsers[fmt]

    def parse(self, text: str, fmt: Optional[DocumentFormat] = None) -> SyntaxTree:
        """Parse *text* into a syntax tree. Never raises on malformed input.

        Args:
            text: Document text.
            fmt: Grammar to use. Detected from the text when ``None``.
        """
        if fmt is None:
            fmt = detect_format(text)
        ts_tree = self._parser(fmt).parse(text.encode("utf-8"))
        nodes = _convert(ts_tree, text)
        if ts_tree.root_node.has_error:
            logger.debug("Parsed %s document with syntax errors (%d nodes)", fmt.value, len(nodes))
        return SyntaxTree(nodes, text, fmt)


def _convert(ts_tree: Any, text: str) -> list[SyntaxNode]:
    """Flatten a tree-sitter tree into pre-ordered nodes using a tree cursor."""
    index = _CharIndex(text)
    records: list[dict[str, Any]] = []
    children: list[list[int]] = []
    parents: list[int] = []

    cursor = ts_tree.walk()
    while True:
        ts_node = cursor.node
        handle = len(records)
        start_offset = index.char(ts_node.start_byte)
        end_offset = index.char(ts_node.end_byte)
        records.append(
            {
                "kind": ts_node.type,
                "start": index.position(ts_node.start_point, ts_node.start_byte),
                "end": index.position(ts_node.end_point, ts_node.end_byte),
                "handle": handle,
                "parent": parents[-1] if parents else None,
                "field": cursor.field_name,
                "depth": len(parents),
                "start_offset": start_offset,
                "end_offset": end_offset,
                "is_missing": ts_node.is_missing,
            }
        )
        children.append([])
        if parents:
            children[parents[-1]].append(handle)

        if cursor.goto_first_child():
            parents.append(handle)
            continue

        while not cursor.goto_next_sibling():
            if not cursor.goto_parent():
                return _freeze(records, children, text)
            parents.pop()


def _freeze(
    records: list[dict[str, Any]], children: list[list[int]], text: str
) -> list[SyntaxNode]:
    nodes: list[SyntaxNode] = []
    for record, child_handles in zip(records, children):
        if child_handles:
            nodes.append(SyntaxNode(children=tuple(child_handles), **record))
        else:
            literal = text[record["start_offset"]:record["end_offset"]]
            nodes.append(SyntaxNode(literal_text=literal, **record))
    return nodes
