"""specls -- analysis and editor support for OpenAPI / Swagger documents.

This package parses OpenAPI 3.x and Swagger 2.0 documents written as JSON or
YAML, extracts their structure (components, paths, servers, references, tags,
security schemes), reports presence and syntax diagnostics with positions,
and serves hover, completion and diagnostics to editors over the Language
Server Protocol.

Typical usage::

    specls serve                 # language server on stdio
    specls check openapi.yaml    # one-shot validation

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    parser: Decoding, presence validation and structural extraction.
    grammar: Position-aware syntax trees built with tree-sitter.
    query: Hover and completion over a document's text.
    server: Document session and the pygls language server.
    config: XDG-aware settings with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
