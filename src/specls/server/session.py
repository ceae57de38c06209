"""Per-document state for the language server.

:class:`DocumentSession` is the only mutable component of specls. It tracks
the current text of every open document together with a revision number and
validates documents on demand. Each validation is tagged with the revision it
started from; a result whose revision has been superseded by a newer edit is
reported as stale so the caller does not publish it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from specls.models import Diagnostic, Severity
from specls.parser.validator import DEFAULT_SOURCE, OpenAPIParser

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "OpenAPI validation failed"


@dataclass
class DocumentState:
    """Current text of one open document."""

    uri: str
    text: str
    revision: int
    version: Optional[int] = None


@dataclass
class ValidationOutcome:
    """Diagnostics computed for a document at a given revision."""

    uri: str
    revision: int
    version: Optional[int]
    text: str
    diagnostics: list[Diagnostic] = field(default_factory=list)


class DocumentSession:
    """Tracks open documents and validates them.

    Revisions come from a single counter shared by all documents, so they
    only ever grow. The editor's own version number is kept alongside for
    publishing.

    Args:
        parser: Parser used for validation. Defaults to an
            :class:`~specls.parser.validator.OpenAPIParser` with syntax
            checks enabled.
    """

    def __init__(self, parser: Optional[OpenAPIParser] = None) -> None:
        self._parser = parser or OpenAPIParser(check_syntax=True)
        self._documents: dict[str, DocumentState] = {}
        self._counter = 0

    def _next_revision(self) -> int:
        self._counter += 1
        return self._counter

    def open(self, uri: str, text: str, version: Optional[int] = None) -> int:
        """Start tracking *uri* with *text*. Returns the new revision."""
        state = DocumentState(uri=uri, text=text, revision=self._next_revision(), version=version)
        self._documents[uri] = state
        logger.debug("Opened %s at revision %d", uri, state.revision)
        return state.revision

    def change(self, uri: str, text: str, version: Optional[int] = None) -> int:
        """Replace the text of *uri*. Unknown documents are opened."""
        state = self._documents.get(uri)
        if state is None:
            return self.open(uri, text, version)
        state.text = text
        state.version = version
        state.revision = self._next_revision()
        logger.debug("Changed %s, now at revision %d", uri, state.revision)
        return state.revision

    def close(self, uri: str) -> None:
        """Stop tracking *uri*. Closing an unknown document is a no-op."""
        if self._documents.pop(uri, None) is not None:
            logger.debug("Closed %s", uri)

    def text(self, uri: str) -> Optional[str]:
        state = self._documents.get(uri)
        return state.text if state is not None else None

    def revision(self, uri: str) -> Optional[int]:
        state = self._documents.get(uri)
        return state.revision if state is not None else None

    def is_current(self, uri: str, revision: int) -> bool:
        """``True`` if *revision* is still the latest one seen for *uri*."""
        return self.revision(uri) == revision

    def __contains__(self, uri: object) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def validate(self, uri: str) -> Optional[ValidationOutcome]:
        """Validate the current text of *uri*.

        Returns:
            The outcome, or ``None`` when the document is not open or was
            edited again before validation finished (the result is stale).
            Decode failures and unexpected errors produce a single generic
            diagnostic instead of the internal error text.
        """
        state = self._documents.get(uri)
        if state is None:
            return None
        revision, version, text = state.revision, state.version, state.text

        try:
            result = self._parser.parse(text)
            if result.errors:
                logger.info("Validation of %s failed: %s", uri, "; ".join(result.errors))
                diagnostics = [self._failure()]
            else:
                diagnostics = list(result.diagnostics or [])
        except Exception:
            logger.exception("Unexpected error validating %s", uri)
            diagnostics = [self._failure()]

        if not self.is_current(uri, revision):
            logger.debug("Discarding stale diagnostics for %s (revision %d)", uri, revision)
            return None
        return ValidationOutcome(
            uri=uri,
            revision=revision,
            version=version,
            text=text,
            diagnostics=diagnostics,
        )

    def _failure(self) -> Diagnostic:
        return Diagnostic(
            message=VALIDATION_FAILED_MESSAGE,
            severity=Severity.ERROR,
            source=self._parser.source or DEFAULT_SOURCE,
        )
