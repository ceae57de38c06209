"""Position-aware syntax trees for API description documents.

The grammar layer parses the same text the decoder sees, but keeps every
node's position, and keeps going when the text is broken. It backs range
queries (what is under the cursor?) and positioned diagnostics.

Typical usage::

    from specls.grammar import GrammarBuilder, node_at_position
    from specls.models import Position

    tree = GrammarBuilder().parse(text)
    node = node_at_position(tree, Position(4, 10))

Sub-modules:

* :mod:`~specls.grammar.tree` -- the :class:`SyntaxNode` arena.
* :mod:`~specls.grammar.builder` -- tree-sitter based construction.
* :mod:`~specls.grammar.queries` -- lookups over a built tree.
"""

from specls.grammar.builder import GrammarBuilder
from specls.grammar.queries import (
    error_nodes,
    find_nodes,
    node_at_position,
    operations_of,
    properties_of,
    top_level_sections,
)
from specls.grammar.tree import SyntaxNode, SyntaxTree

__all__ = [
    "GrammarBuilder",
    "SyntaxNode",
    "SyntaxTree",
    "error_nodes",
    "find_nodes",
    "node_at_position",
    "operations_of",
    "properties_of",
    "top_level_sections",
]
