"""Language server wiring: pygls handlers on top of :class:`DocumentSession`.

The server advertises incremental text sync, completion (triggered by
``.``, ``"``, ``'`` and ``/``) and hover. Diagnostics are pushed after every
open and change, and cleared when a document is closed.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from lsprotocol import types
from pygls.server import LanguageServer

from specls import __version__
from specls.config import ServerSettings
from specls.exceptions import ServerError
from specls.models import Position
from specls.parser.validator import OpenAPIParser
from specls.query import QueryEngine
from specls.server.ranges import to_lsp_diagnostic
from specls.server.session import DocumentSession

logger = logging.getLogger(__name__)

SERVER_NAME = "specls"


class SpeclsLanguageServer:
    """OpenAPI language server.

    Args:
        settings: Effective settings. Defaults to :class:`ServerSettings`.
        language_server: pygls server to register handlers on. A new
            :class:`~pygls.server.LanguageServer` is created when omitted.
    """

    def __init__(
        self,
        settings: Optional[ServerSettings] = None,
        language_server: Optional[Any] = None,
    ) -> None:
        self.settings = settings or ServerSettings()
        self.ls = language_server or LanguageServer(
            SERVER_NAME,
            f"v{__version__}",
            text_document_sync_kind=types.TextDocumentSyncKind.Incremental,
        )
        self.session = DocumentSession(
            OpenAPIParser(
                check_syntax=self.settings.check_syntax,
                source=self.settings.diagnostic_source,
            )
        )
        self.queries = QueryEngine(OpenAPIParser(source=self.settings.diagnostic_source))
        self._register_handlers()

    def _register_handlers(self) -> None:
        completion_options = types.CompletionOptions(
            trigger_characters=list(self.settings.trigger_characters),
            resolve_provider=False,
        )

        @self.ls.feature(types.TEXT_DOCUMENT_DID_OPEN)
        def did_open(params: types.DidOpenTextDocumentParams) -> None:
            self.did_open(params)

        @self.ls.feature(types.TEXT_DOCUMENT_DID_CHANGE)
        def did_change(params: types.DidChangeTextDocumentParams) -> None:
            self.did_change(params)

        @self.ls.feature(types.TEXT_DOCUMENT_DID_CLOSE)
        def did_close(params: types.DidCloseTextDocumentParams) -> None:
            self.did_close(params)

        @self.ls.feature(types.TEXT_DOCUMENT_COMPLETION, completion_options)
        def completion(params: types.CompletionParams) -> types.CompletionList:
            return self.completion(params)

        @self.ls.feature(types.TEXT_DOCUMENT_HOVER)
        def hover(params: types.HoverParams) -> Optional[types.Hover]:
            return self.hover(params)

    # --- Document lifecycle ---

    def did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        document = params.text_document
        logger.debug("didOpen %s (version %s)", document.uri, document.version)
        self.session.open(document.uri, document.text, document.version)
        self._publish(document.uri)

    def did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        uri = params.text_document.uri
        logger.debug("didChange %s (version %s)", uri, params.text_document.version)
        # pygls has already applied the incremental edits to its workspace copy.
        text = self.ls.workspace.get_text_document(uri).source
        self.session.change(uri, text, params.text_document.version)
        self._publish(uri)

    def did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        uri = params.text_document.uri
        logger.debug("didClose %s", uri)
        self.session.close(uri)
        self.ls.publish_diagnostics(uri, [])

    def _publish(self, uri: str) -> None:
        outcome = self.session.validate(uri)
        if outcome is None:
            return
        diagnostics = [
            to_lsp_diagnostic(outcome.text, diagnostic, self.settings.diagnostic_source)
            for diagnostic in outcome.diagnostics
        ]
        logger.debug("Publishing %d diagnostics for %s", len(diagnostics), uri)
        self.ls.publish_diagnostics(uri, diagnostics, version=outcome.version)

    # --- Queries ---

    def _text_of(self, uri: str) -> Optional[str]:
        text = self.session.text(uri)
        if text is not None:
            return text
        try:
            return self.ls.workspace.get_text_document(uri).source
        except Exception:
            logger.exception("Document %s is not available", uri)
            return None

    def completion(self, params: types.CompletionParams) -> types.CompletionList:
        """Offer every component of the document as a completion item."""
        items: list[types.CompletionItem] = []
        try:
            text = self._text_of(params.text_document.uri)
            if text is not None:
                position = Position(params.position.line, params.position.character)
                for candidate in self.queries.completion(text, position):
                    items.append(
                        types.CompletionItem(
                            label=candidate.label,
                            kind=types.CompletionItemKind.Class,
                            detail=candidate.detail,
                            documentation=types.MarkupContent(
                                kind=types.MarkupKind.Markdown,
                                value=candidate.documentation,
                            ),
                        )
                    )
        except Exception:
            logger.exception("Error in completion handler")
            items = []
        return types.CompletionList(is_incomplete=False, items=items)

    def hover(self, params: types.HoverParams) -> Optional[types.Hover]:
        """Show the documentation of the component named under the cursor."""
        try:
            text = self._text_of(params.text_document.uri)
            if text is None:
                return None
            position = Position(params.position.line, params.position.character)
            content = self.queries.hover(text, position)
        except Exception:
            logger.exception("Error in hover handler")
            return None
        if content is None:
            return None
        return types.Hover(
            contents=types.MarkupContent(kind=types.MarkupKind.Markdown, value=content.markdown)
        )

    # --- Transport ---

    def start(self, use_tcp: bool = False, host: str = "127.0.0.1", port: int = 2087) -> None:
        """Serve over stdio, or TCP when *use_tcp* is set.

        Raises:
            ServerError: If the transport fails.
        """
        try:
            if use_tcp:
                logger.info("Starting specls on %s:%d", host, port)
                self.ls.start_tcp(host, port)
            else:
                logger.info("Starting specls on stdio")
                self.ls.start_io()
        except KeyboardInterrupt:
            logger.info("Received shutdown signal")
        except (BrokenPipeError, EOFError):
            logger.info("Client disconnected")
        except OSError as exc:
            raise ServerError(f"Language server transport failed: {exc}") from exc
        finally:
            logger.info("specls stopped")
