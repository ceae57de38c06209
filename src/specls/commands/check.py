"""``specls check`` -- validate a document once.

Runs the same parser the language server uses and prints its diagnostics as
a table (or JSON / plain text with ``--json`` / ``--plain``). Exits ``0``
when the document is valid and ``7`` otherwise, so the command can gate CI.
"""

from __future__ import annotations

from typing import Optional

import typer

from specls.commands import read_source
from specls.exceptions import ConfigError
from specls.exit_codes import EXIT_SPEC_PARSE_ERROR
from specls.output import debug, error, get_output, success


def check_command(
    source: str = typer.Argument(..., help="Document path, URL, or '-' for stdin."),
    check_syntax: Optional[bool] = typer.Option(
        None,
        "--syntax/--no-syntax",
        help="Report grammar errors as diagnostics (default from settings).",
    ),
) -> None:
    """Validate an OpenAPI / Swagger document and print its diagnostics.

    Args:
        source: Path, URL, or ``-`` for stdin.
        check_syntax: Override the ``check_syntax`` setting.

    Example::

        specls check openapi.yaml
        cat openapi.json | specls check - --json
    """
    from specls.config import resolve_settings
    from specls.parser.validator import OpenAPIParser

    try:
        settings = resolve_settings({"check_syntax": check_syntax})
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    text = read_source(source)
    parser = OpenAPIParser(
        check_syntax=settings.check_syntax,
        source=settings.diagnostic_source,
    )
    result = parser.parse(text)
    debug(f"Detected format: {result.format.value if result.format else 'unknown'}")

    if result.errors:
        for message in result.errors:
            error(message)
        raise typer.Exit(code=EXIT_SPEC_PARSE_ERROR)

    diagnostics = result.diagnostics or []
    if diagnostics:
        get_output().print_diagnostics(source, diagnostics)

    if not result.is_valid:
        error(f"{source}: {len(diagnostics)} problem(s) found")
        raise typer.Exit(code=EXIT_SPEC_PARSE_ERROR)

    success(f"{source} is valid")
