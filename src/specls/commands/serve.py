"""``specls serve`` -- run the language server.

Speaks LSP over stdio by default, or over TCP with ``--tcp``. Logging goes to
stderr or ``--log-file``; stdout is reserved for the protocol stream.
"""

from __future__ import annotations

from typing import Optional

import typer

from specls.exceptions import SpeclsError
from specls.output import error


def serve_command(
    tcp: bool = typer.Option(False, "--tcp", help="Listen on TCP instead of stdio."),
    host: str = typer.Option("127.0.0.1", "--host", help="TCP host to bind."),
    port: int = typer.Option(2087, "--port", help="TCP port to bind."),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", help="Write logs to this file instead of stderr."
    ),
) -> None:
    """Start the OpenAPI language server.

    Example::

        specls serve
        specls serve --tcp --port 2087 --log-level DEBUG
    """
    from specls.config import resolve_settings
    from specls.logging_setup import configure_logging
    from specls.server.server import SpeclsLanguageServer

    try:
        settings = resolve_settings({"log_level": log_level, "log_file": log_file})
        configure_logging(settings.log_level, settings.log_file)
        SpeclsLanguageServer(settings).start(use_tcp=tcp, host=host, port=port)
    except SpeclsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
