"""Canonical models shared across all specls modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Positions** -- :class:`Position` and :class:`Range`, plain named tuples so
that Python's tuple ordering gives row-major comparison for free.

**Analysis output** -- produced by the parser and extractor and consumed by
the query engine, the language server and the CLI:
    :class:`Severity`, :class:`DiagnosticCategory`, :class:`Diagnostic`,
    :class:`DocumentFormat`, :class:`ParserResult`, :class:`HTTPMethod`,
    :class:`APIInfo`, :class:`ServerInfo`, :class:`Component`,
    :class:`PathEntry`, :class:`SecurityScheme`, :class:`Tag`.

**Editor answers** -- :class:`HoverContent` and :class:`CompletionCandidate`,
transport-neutral shapes that :mod:`specls.server.server` maps onto LSP types.

All pydantic models use Pydantic v2.
"""

from __future__ import annotations

import enum
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, Field


# --- Positions ---


class Position(NamedTuple):
    """A zero-based ``(row, column)`` location in a text document."""

    row: int
    column: int


class Range(NamedTuple):
    """A span between two positions, inclusive at both ends."""

    start: Position
    end: Position

    def contains(self, position: Position) -> bool:
        """Return ``True`` if *position* lies within this range (row-major)."""
        return self.start <= position <= self.end


# --- Diagnostics ---


class Severity(str, enum.Enum):
    """Severity of a :class:`Diagnostic`."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class DiagnosticCategory(str, enum.Enum):
    """Optional membership tag a caller may attach when adding a diagnostic.

    See :meth:`~specls.parser.diagnostics.DiagnosticCollector.clear_by_category`.
    """

    AST = "ast"
    SYNTAX = "syntax"


class Diagnostic(BaseModel):
    """A single validation finding.

    ``line``/``column`` are zero-based. ``start_offset``/``end_offset`` are
    character offsets into the document text; when present the language
    server derives the editor range from them, otherwise the diagnostic is
    shown across the whole document.
    """

    message: str
    severity: Severity = Severity.ERROR
    line: Optional[int] = None
    column: Optional[int] = None
    source: Optional[str] = None
    start_offset: Optional[int] = None
    end_offset: Optional[int] = None


# --- Parser output ---


class DocumentFormat(str, enum.Enum):
    """Text formats accepted for API description documents."""

    JSON = "json"
    YAML = "yaml"


class ParserResult(BaseModel):
    """Outcome of a single :meth:`~specls.parser.validator.OpenAPIParser.parse` call.

    ``is_valid`` holds iff no diagnostics were collected. When decoding fails
    ``errors`` carries the failure messages and ``document``/``diagnostics``
    stay ``None``.
    """

    is_valid: bool
    document: Optional[Any] = None
    errors: Optional[list[str]] = None
    diagnostics: Optional[list[Diagnostic]] = None
    format: Optional[DocumentFormat] = None


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised as operations under a path item."""

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    OPTIONS = "options"
    HEAD = "head"
    TRACE = "trace"


class APIInfo(BaseModel):
    """API metadata from the document's *Info Object*."""

    title: str = ""
    version: str = ""
    description: Optional[str] = None
    contact: Optional[dict[str, Any]] = None
    license: Optional[dict[str, Any]] = None


class ServerInfo(BaseModel):
    """A server entry from the document's ``servers`` array."""

    url: str = "/"
    description: Optional[str] = None
    variables: Optional[dict[str, Any]] = None


class Component(BaseModel):
    """One reusable definition found under ``components.<category>.<name>``.

    ``type`` is the category name (``schemas``, ``responses``, ...), not a
    JSON Schema type.
    """

    name: str
    type: str
    properties: Optional[dict[str, Any]] = None
    required: Optional[list[str]] = None


class PathEntry(BaseModel):
    """A path template with the operations declared under it, keyed by verb."""

    path: str
    methods: dict[str, Any] = Field(default_factory=dict)


class SecurityScheme(BaseModel):
    """A *Security Scheme Object* from ``components.securitySchemes``.

    The ``type`` field discriminates between ``apiKey``, ``http``, ``oauth2``,
    and ``openIdConnect`` schemes. Only the fields relevant to the scheme type
    are populated.
    """

    name: str
    type: str = ""
    description: Optional[str] = None
    # apiKey
    param_name: Optional[str] = Field(default=None, alias="in_name")
    location: Optional[str] = Field(default=None, alias="in_location")
    # http
    scheme: Optional[str] = None
    bearer_format: Optional[str] = None
    # oauth2
    flows: Optional[dict[str, Any]] = None
    # openIdConnect
    openid_connect_url: Optional[str] = None

    model_config = {"populate_by_name": True}


class Tag(BaseModel):
    """A tag declared in the document's top-level ``tags`` list."""

    name: str
    description: Optional[str] = None


# --- Editor answers ---


class HoverContent(BaseModel):
    """Markdown shown when hovering a component name."""

    markdown: str


class CompletionCandidate(BaseModel):
    """A completion suggestion for a component name."""

    label: str
    kind: str = "component"
    detail: Optional[str] = None
    documentation: Optional[str] = None
