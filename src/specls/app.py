"""``specls`` command line.

Three commands share one root:

* ``specls serve`` starts the language server (stdio by default).
* ``specls check DOC`` validates a document and exits ``7`` on problems.
* ``specls inspect ... DOC`` lists components, paths, references or info.

The root options only pick how ``check``/``inspect`` render their results;
``serve`` never writes to stdout outside the protocol stream.
"""

from __future__ import annotations

import signal
import sys

import typer

from specls import __version__
from specls.commands.check import check_command
from specls.commands.inspect import inspect_app
from specls.commands.serve import serve_command
from specls.exceptions import SpeclsError
from specls.exit_codes import EXIT_GENERIC_FAILURE
from specls.output import OutputFormat, OutputManager, error, set_output

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="specls",
    help="Language server and checker for OpenAPI / Swagger documents.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("serve")(serve_command)
app.command("check")(check_command)
app.add_typer(inspect_app, name="inspect", help="List what a document declares.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"specls {__version__}")
        raise typer.Exit()


def _pick_format(json_output: bool, plain_output: bool) -> OutputFormat:
    if json_output and plain_output:
        raise typer.BadParameter("--json and --plain cannot be combined.")
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN
    return OutputFormat.AUTO


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True,
        help="Print the specls version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Emit check/inspect results as JSON.",
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Emit tab-separated results without styling.",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only report errors.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Also report detected format and sources.",
    ),
) -> None:
    """Select how diagnostics and document listings are rendered."""
    set_output(OutputManager(
        format=_pick_format(json_output, plain_output),
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    ))
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _interrupted(signum: int, frame: object) -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def main() -> None:
    """Console-script entry point.

    A :class:`~specls.exceptions.SpeclsError` escaping a command exits with
    that error's code; any other exception exits ``1``.
    """
    signal.signal(signal.SIGINT, _interrupted)
    try:
        app()
    except KeyboardInterrupt:
        _interrupted(signal.SIGINT, None)
    except SpeclsError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {type(exc).__name__}: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
