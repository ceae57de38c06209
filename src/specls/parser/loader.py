"""Decode API description text and load it from a URL, local file, or stdin.

This module is the raw document parser: it turns text into the generic value
tree (dicts, lists and scalars) that the validator and the extractor work on.
Format selection is a textual heuristic, see :func:`detect_format`.

The public functions are:

* :func:`detect_format` -- JSON or YAML, decided from the leading character.
* :func:`decode` -- decode text into a value tree, raising
  :class:`~specls.exceptions.DecodeError` on malformed input.
* :func:`load_source` -- read raw text from a URL, file path, or ``-``
  (stdin). Used by the CLI; the language server receives text from the
  editor instead.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specls.exceptions import DecodeError, SpecParseError
from specls.models import DocumentFormat

logger = logging.getLogger(__name__)


def detect_format(text: str) -> DocumentFormat:
    """Pick the decoder for *text*.

    Leading whitespace is ignored. A document starting with ``{`` or ``[`` is
    treated as JSON; anything else as YAML. A YAML document whose root is a
    flow sequence (``[a, b]``) is therefore detected as JSON and, unless it
    is also valid JSON, fails to decode.
    """
    stripped = text.strip()
    if stripped.startswith(("{", "[")):
        return DocumentFormat.JSON
    return DocumentFormat.YAML


def decode(text: str, fmt: DocumentFormat | None = None) -> Any:
    """Decode *text* into a generic value tree.

    Args:
        text: The raw document text.
        fmt: Format override. Detected with :func:`detect_format` when
            ``None``.

    Returns:
        The decoded value (usually a dict for API descriptions).

    Raises:
        DecodeError: If the text is not well-formed in the selected format.
    """
    if fmt is None:
        fmt = detect_format(text)

    if fmt == DocumentFormat.JSON:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Invalid JSON: {exc}") from exc

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DecodeError(f"Invalid YAML: {exc}") from exc


def load_source(source: str) -> str:
    """Read document text from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The raw document text, undecoded.

    Raises:
        SpecParseError: If the source cannot be read or is empty.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> str:
    """Read document text from stdin.

    Raises:
        SpecParseError: If stdin cannot be read or is empty.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")
    return content


def _load_from_url(url: str) -> str:
    """Fetch document text from an HTTP(S) URL.

    Raises:
        SpecParseError: If the URL cannot be fetched.
    """
    logger.debug("Fetching document from %s", url)
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch document from {url}: {exc}") from exc

    if not response.text.strip():
        raise SpecParseError(f"Empty response body from {url}")
    return response.text


def _load_from_file(path: str) -> str:
    """Read document text from a local file.

    Raises:
        SpecParseError: If the file does not exist, cannot be read, or is empty.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read document {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Document is empty: {path}")
    return content
