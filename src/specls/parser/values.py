"""Typed accessors over the decoded document tree.

A decoded document is an untyped tree of ``dict``/``list``/scalar values.
Sections that are absent (or explicitly ``null``) read as empty defaults so
that extractors never fail on a minimal document, but a section that is
present with the wrong shape raises :class:`~specls.exceptions.TypeMismatch`
instead of being silently coerced.
"""

from __future__ import annotations

from typing import Any

from specls.exceptions import TypeMismatch


def as_mapping(value: Any, where: str) -> dict[str, Any]:
    """Return *value* if it is a mapping, else raise :class:`TypeMismatch`."""
    if not isinstance(value, dict):
        raise TypeMismatch(where, "mapping", value)
    return value


def as_sequence(value: Any, where: str) -> list[Any]:
    """Return *value* if it is a sequence, else raise :class:`TypeMismatch`."""
    if not isinstance(value, list):
        raise TypeMismatch(where, "sequence", value)
    return value


def get_mapping(parent: dict[str, Any], key: str, where: str | None = None) -> dict[str, Any]:
    """Read ``parent[key]`` as a mapping, defaulting to ``{}`` when absent."""
    value = parent.get(key)
    if value is None:
        return {}
    return as_mapping(value, where or key)


def get_sequence(parent: dict[str, Any], key: str, where: str | None = None) -> list[Any]:
    """Read ``parent[key]`` as a sequence, defaulting to ``[]`` when absent."""
    value = parent.get(key)
    if value is None:
        return []
    return as_sequence(value, where or key)
