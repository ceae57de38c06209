"""Ordered, categorizable collection of validation findings.

A :class:`DiagnosticCollector` is created fresh for every parse call and
handed around explicitly; there is no module-level collector.
"""

from __future__ import annotations

from specls.models import Diagnostic, DiagnosticCategory


class DiagnosticCollector:
    """Accumulates :class:`~specls.models.Diagnostic` objects in insertion order.

    Category membership is an auxiliary tag kept outside the diagnostic
    itself. Callers opt in by passing ``category`` to :meth:`add`; untagged
    diagnostics are only removed by :meth:`clear_all`.

    Membership is tracked by object identity, so two diagnostics with equal
    fields stay distinguishable.
    """

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []
        self._members: dict[DiagnosticCategory, set[int]] = {
            category: set() for category in DiagnosticCategory
        }

    def add(
        self,
        diagnostic: Diagnostic,
        category: DiagnosticCategory | None = None,
    ) -> None:
        """Append *diagnostic*, optionally tagging it into *category*."""
        self._diagnostics.append(diagnostic)
        if category is not None:
            self._members[category].add(id(diagnostic))

    def diagnostics(self) -> list[Diagnostic]:
        """Return a snapshot of the collected diagnostics."""
        return list(self._diagnostics)

    def category_size(self, category: DiagnosticCategory) -> int:
        return len(self._members[category])

    def clear_all(self) -> None:
        """Drop every diagnostic and empty both category sets."""
        self._diagnostics = []
        for members in self._members.values():
            members.clear()

    def clear_by_category(self, category: DiagnosticCategory) -> None:
        """Drop only the diagnostics that were tagged into *category*."""
        members = self._members[category]
        self._diagnostics = [d for d in self._diagnostics if id(d) not in members]
        members.clear()

    def __len__(self) -> int:
        return len(self._diagnostics)
