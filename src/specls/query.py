"""Answer editor queries (hover, completion) against a document's current text.

Every query re-parses the text it is given; nothing is cached between calls,
so the answer always reflects exactly the text the editor sent. A query that
finds nothing returns ``None`` or an empty list rather than raising.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from specls.exceptions import SpeclsError
from specls.models import CompletionCandidate, Component, HoverContent, Position
from specls.parser import extractor
from specls.parser.validator import OpenAPIParser

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"[A-Za-z0-9_\-]+")


def word_range_at(text: str, offset: int) -> Optional[tuple[int, int]]:
    """Return ``(start, end)`` of the word touching *offset*, or ``None``.

    A word is a maximal run of ``[A-Za-z0-9_-]``. An offset right after the
    last character of a word still counts as touching it.
    """
    for match in WORD_PATTERN.finditer(text):
        if match.start() > offset:
            break
        if match.start() <= offset <= match.end():
            return match.start(), match.end()
    return None


def offset_at(text: str, position: Position) -> int:
    """Convert a ``(row, column)`` position into a character offset.

    Rows past the end clamp to the end of the text, columns past the end of
    a line clamp to the end of that line.
    """
    lines = text.split("\n")
    if position.row >= len(lines):
        return len(text)
    offset = sum(len(line) + 1 for line in lines[: position.row])
    line = lines[position.row].rstrip("\r")
    return offset + min(max(position.column, 0), len(line))


def position_at(text: str, offset: int) -> Position:
    """Convert a character offset into a ``(row, column)`` position."""
    offset = min(max(offset, 0), len(text))
    before = text[:offset]
    row = before.count("\n")
    return Position(row, offset - (before.rfind("\n") + 1))


def _property_type(definition: Any) -> str:
    if not isinstance(definition, dict):
        return "any"
    if definition.get("type") is not None:
        return str(definition["type"])
    if isinstance(definition.get("$ref"), str):
        return definition["$ref"]
    return "any"


def render_component_doc(component: Component) -> str:
    """Render the markdown documentation block for *component*.

    The block has a header with the name and category, then a
    **Properties** list (type and optional description per property) and a
    **Required Properties** list. Each list is omitted when there is nothing
    to show.
    """
    doc = f"### {component.name}\n\n**Type:** {component.type}\n\n"

    if component.properties:
        doc += "\n**Properties:**\n\n"
        for name, definition in component.properties.items():
            line = f"- `{name}`: {_property_type(definition)}"
            if isinstance(definition, dict) and definition.get("description"):
                line += f" - {definition['description']}"
            doc += line + "\n"

    if component.required:
        doc += "\n**Required Properties:**\n\n"
        for name in component.required:
            doc += f"- `{name}`\n"

    return doc


class QueryEngine:
    """Resolves hover and completion requests.

    Args:
        parser: Parser used for every query. A default
            :class:`~specls.parser.validator.OpenAPIParser` when omitted.
    """

    def __init__(self, parser: Optional[OpenAPIParser] = None) -> None:
        self._parser = parser or OpenAPIParser()

    def hover(self, text: str, position: Position) -> Optional[HoverContent]:
        """Document the component whose name is under *position*.

        The word under the cursor must equal a component name exactly; when
        several categories define the same name, the first one in document
        order wins. Returns ``None`` unless the document parses without
        diagnostics, and when no component matches.
        """
        result = self._parser.parse(text)
        if not result.is_valid or result.document is None:
            return None

        word_range = word_range_at(text, offset_at(text, position))
        if word_range is None:
            return None
        word = text[word_range[0]:word_range[1]]

        try:
            found = extractor.components(result.document)
        except SpeclsError as exc:
            logger.debug("Hover skipped, components unreadable: %s", exc)
            return None

        for component in found:
            if component.name == word:
                return HoverContent(markdown=render_component_doc(component))
        return None

    def completion(self, text: str, position: Position) -> list[CompletionCandidate]:
        """Offer every component as a completion candidate.

        Returns an empty list unless the document parses without
        diagnostics. *position* is accepted for protocol symmetry; the
        candidate list does not depend on it.
        """
        result = self._parser.parse(text)
        if not result.is_valid or result.document is None:
            return []

        try:
            found = extractor.components(result.document)
        except SpeclsError as exc:
            logger.debug("Completion skipped, components unreadable: %s", exc)
            return []

        return [
            CompletionCandidate(
                label=component.name,
                kind="component",
                detail=f"{component.type} component",
                documentation=render_component_doc(component),
            )
            for component in found
        ]
