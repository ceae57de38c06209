"""Position-annotated syntax tree stored as an arena of nodes.

:class:`SyntaxTree` owns a flat list of :class:`SyntaxNode` objects; nodes
refer to their children and parent by integer handle (their index in the
list). Handle ``0`` is always the root. Keeping the tree flat lets every
traversal run on an explicit stack, so deeply nested documents never hit the
interpreter's recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from specls.models import DocumentFormat, Position, Range


@dataclass(frozen=True)
class SyntaxNode:
    """A single node of the syntax tree.

    Composite nodes (mappings, sequences, pairs) carry a non-empty
    ``children`` tuple of handles; terminal tokens carry ``literal_text``
    instead. A node never has both.

    ``start``/``end`` are zero-based ``(row, column)`` positions with the
    column counted in characters. ``start_offset``/``end_offset`` are the
    matching character offsets into the source text. ``field`` is the
    grammar's field name for this node inside its parent (``key``,
    ``value``), when it has one.
    """

    kind: str
    start: Position
    end: Position
    children: Optional[tuple[int, ...]] = None
    literal_text: Optional[str] = None
    handle: int = 0
    parent: Optional[int] = None
    field: Optional[str] = None
    depth: int = 0
    start_offset: int = 0
    end_offset: int = 0
    is_missing: bool = False

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)

    @property
    def is_error(self) -> bool:
        """``True`` for parser error nodes and tokens the parser had to invent."""
        return self.kind == "ERROR" or self.is_missing


class SyntaxTree:
    """Arena of :class:`SyntaxNode` objects plus the text they were parsed from.

    Args:
        nodes: Nodes in pre-order; ``nodes[i].handle`` must equal ``i``.
        source: The parsed text.
        format: The grammar the text was parsed with.
    """

    def __init__(self, nodes: list[SyntaxNode], source: str, format: DocumentFormat) -> None:
        if not nodes:
            raise ValueError("A syntax tree needs at least a root node")
        self._nodes = nodes
        self.source = source
        self.format = format

    @property
    def root(self) -> SyntaxNode:
        return self._nodes[0]

    def node(self, handle: int) -> SyntaxNode:
        return self._nodes[handle]

    def parent_of(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def children_of(self, node: SyntaxNode) -> list[SyntaxNode]:
        if not node.children:
            return []
        return [self._nodes[h] for h in node.children]

    def text_of(self, node: SyntaxNode) -> str:
        """Return the slice of the source text covered by *node*."""
        return self.source[node.start_offset:node.end_offset]

    def walk(self, start: Optional[SyntaxNode] = None) -> Iterator[SyntaxNode]:
        """Yield *start* (default: the root) and its descendants in pre-order."""
        stack = [start if start is not None else self.root]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(self._nodes[h] for h in reversed(node.children))

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[SyntaxNode]:
        return iter(self._nodes)
