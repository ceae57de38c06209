"""Read-only queries over a :class:`~specls.grammar.tree.SyntaxTree`.

The functions understand both grammars: JSON (``object``/``pair``) and YAML
(``block_mapping``/``block_mapping_pair`` and their flow-style
counterparts). Section and key scans are deliberately single-level: a
component named ``paths`` is never mistaken for the top-level ``paths``
section.
"""

from __future__ import annotations

from typing import Optional

from specls.grammar.tree import SyntaxNode, SyntaxTree
from specls.models import HTTPMethod, Position

MAPPING_KINDS = frozenset({"object", "block_mapping", "flow_mapping"})
PAIR_KINDS = frozenset({"pair", "block_mapping_pair", "flow_pair"})
# Nodes that wrap a single value without adding structure
WRAPPER_KINDS = frozenset({"document", "stream", "block_node", "flow_node"})

TOP_LEVEL_SECTIONS = ("info", "paths", "components", "servers", "security")
_VERBS = frozenset(m.value for m in HTTPMethod)


def find_nodes(tree: SyntaxTree, kind: str) -> list[SyntaxNode]:
    """Return every node whose kind is exactly *kind*, in pre-order."""
    return [node for node in tree.walk() if node.kind == kind]


def node_at_position(tree: SyntaxTree, position: Position) -> Optional[SyntaxNode]:
    """Return the innermost node whose range contains *position*.

    Among all containing nodes the one with the latest start and earliest
    end wins; a parent and child with identical ranges resolve to the child.
    Returns ``None`` when the position is outside the root's range.
    """
    best: Optional[SyntaxNode] = None
    best_key = None
    for node in tree:
        if not node.range.contains(position):
            continue
        key = (node.start, (-node.end.row, -node.end.column), node.depth)
        if best_key is None or key > best_key:
            best, best_key = node, key
    return best


def error_nodes(tree: SyntaxTree) -> list[SyntaxNode]:
    """Return the parser's ``ERROR`` nodes and missing-token nodes."""
    return [node for node in tree.walk() if node.is_error]


def key_text(tree: SyntaxTree, node: SyntaxNode) -> str:
    """Return the unquoted text of a mapping key node."""
    text = tree.text_of(node).strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def as_mapping_node(tree: SyntaxTree, node: Optional[SyntaxNode]) -> Optional[SyntaxNode]:
    """Descend through wrapper nodes until a mapping node is reached."""
    while node is not None and node.kind not in MAPPING_KINDS:
        if node.kind not in WRAPPER_KINDS and node.kind not in PAIR_KINDS:
            return None
        if node.kind in PAIR_KINDS:
            node = pair_value(tree, node)
            continue
        node = next(
            (
                child
                for child in tree.children_of(node)
                if child.kind in MAPPING_KINDS or child.kind in WRAPPER_KINDS
            ),
            None,
        )
    return node


def root_mapping(tree: SyntaxTree) -> Optional[SyntaxNode]:
    """Return the document's top-level mapping node, if it has one."""
    return as_mapping_node(tree, tree.root)


def pair_key(tree: SyntaxTree, pair: SyntaxNode) -> Optional[SyntaxNode]:
    children = tree.children_of(pair)
    for child in children:
        if child.field == "key":
            return child
    return children[0] if children else None


def pair_value(tree: SyntaxTree, pair: SyntaxNode) -> Optional[SyntaxNode]:
    children = tree.children_of(pair)
    for child in children:
        if child.field == "value":
            return child
    # Grammars without field names: the value follows the ':' token
    seen_colon = False
    for child in children:
        if child.kind == ":":
            seen_colon = True
        elif seen_colon and child.kind != "comment":
            return child
    return None


def mapping_pairs(
    tree: SyntaxTree, node: Optional[SyntaxNode]
) -> list[tuple[str, SyntaxNode, Optional[SyntaxNode]]]:
    """List ``(key, pair_node, value_node)`` for the direct pairs of a mapping.

    *node* may be a mapping or anything wrapping one (a pair's value, a
    ``block_node``). Returns ``[]`` for non-mapping nodes.
    """
    mapping = as_mapping_node(tree, node)
    if mapping is None:
        return []
    result: list[tuple[str, SyntaxNode, Optional[SyntaxNode]]] = []
    for child in tree.children_of(mapping):
        if child.kind not in PAIR_KINDS:
            continue
        key = pair_key(tree, child)
        if key is None:
            continue
        result.append((key_text(tree, key), child, pair_value(tree, child)))
    return result


def top_level_sections(tree: SyntaxTree) -> dict[str, SyntaxNode]:
    """Return the value nodes of the known top-level sections that are present.

    Keys are a subset of ``info``, ``paths``, ``components``, ``servers``
    and ``security``. Only the root mapping's own pairs are scanned.
    """
    sections: dict[str, SyntaxNode] = {}
    for key, _pair, value in mapping_pairs(tree, tree.root):
        if key in TOP_LEVEL_SECTIONS and value is not None:
            sections[key] = value
    return sections


def top_level_pair(tree: SyntaxTree, name: str) -> Optional[SyntaxNode]:
    """Return the root mapping's pair node for key *name*, if present."""
    for key, pair, _value in mapping_pairs(tree, tree.root):
        if key == name:
            return pair
    return None


def operations_of(tree: SyntaxTree, path_item: SyntaxNode) -> dict[str, SyntaxNode]:
    """Return the operation value nodes of a path item, keyed by lower-case verb."""
    operations: dict[str, SyntaxNode] = {}
    for key, _pair, value in mapping_pairs(tree, path_item):
        verb = key.lower()
        if verb in _VERBS and value is not None:
            operations[verb] = value
    return operations


def properties_of(tree: SyntaxTree, schema: SyntaxNode) -> dict[str, SyntaxNode]:
    """Return the direct key/value pairs of a mapping node as ``{key: value_node}``."""
    return {
        key: value
        for key, _pair, value in mapping_pairs(tree, schema)
        if value is not None
    }
