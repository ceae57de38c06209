"""Built-in CLI sub-commands for specls.

* :mod:`~specls.commands.serve` -- run the language server (stdio or TCP).
* :mod:`~specls.commands.check` -- validate a document once and print its
  diagnostics.
* :mod:`~specls.commands.inspect` -- list components, paths, references and
  API info of a document.

``serve`` and ``check`` are plain callbacks registered directly on the root
app; ``inspect`` is a :class:`typer.Typer` sub-application.
"""

from __future__ import annotations

from typing import Any

import typer

from specls.exceptions import SpeclsError
from specls.output import error


def read_source(source: str) -> str:
    """Read the text of *source* (path, URL or ``-``) for a command.

    Raises:
        typer.Exit: With the error's exit code when the source cannot be read.
    """
    from specls.parser.loader import load_source

    try:
        return load_source(source)
    except SpeclsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def read_document(source: str) -> Any:
    """Read and decode *source* into a document.

    Raises:
        typer.Exit: With the error's exit code when the source cannot be
            read or decoded.
    """
    from specls.parser.loader import decode

    text = read_source(source)
    try:
        return decode(text)
    except SpeclsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
