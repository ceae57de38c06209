"""Inspect commands -- examine the structure of a document.

Provides the ``specls inspect`` sub-command group with read-only commands
for viewing what a document declares: components, paths (with their
operations), ``$ref`` references, and general API info. Every command takes
the document source (path, URL or ``-``) as its argument.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import typer

from specls.commands import read_document
from specls.exceptions import SpeclsError
from specls.output import error, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)

_T = TypeVar("_T")

_SOURCE_ARGUMENT = typer.Argument(..., help="Document path, URL, or '-' for stdin.")


def _extract(func: Callable[[Any], _T], document: Any) -> _T:
    """Run an extractor, turning shape errors into a clean CLI exit."""
    try:
        return func(document)
    except SpeclsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("components")
def inspect_components(source: str = _SOURCE_ARGUMENT) -> None:
    """List every component with its category and properties.

    Example::

        specls inspect components openapi.yaml
    """
    from specls.parser import extractor

    found = _extract(extractor.components, read_document(source))
    if not found:
        info("No components defined in this document.")
        return

    rows: list[list[str]] = []
    for component in found:
        prop_names = list((component.properties or {}).keys())
        props = ", ".join(prop_names[:5])
        if len(prop_names) > 5:
            props += "..."
        rows.append([
            component.name,
            component.type,
            props,
            ", ".join(component.required or []),
        ])

    get_output().print_table(
        ["Component", "Type", "Properties", "Required"],
        rows,
        title=f"Components ({len(rows)})",
    )


@inspect_app.command("paths")
def inspect_paths(source: str = _SOURCE_ARGUMENT) -> None:
    """List every path with the HTTP methods it defines.

    Example::

        specls inspect paths openapi.json
    """
    from specls.parser import extractor

    found = _extract(extractor.paths, read_document(source))
    if not found:
        info("No paths defined in this document.")
        return

    rows = [
        [entry.path, ", ".join(method.upper() for method in entry.methods)]
        for entry in found
    ]
    get_output().print_table(["Path", "Methods"], rows, title=f"Paths ({len(rows)})")


@inspect_app.command("refs")
def inspect_refs(source: str = _SOURCE_ARGUMENT) -> None:
    """List every ``$ref`` value in document order, duplicates included.

    Example::

        specls inspect refs openapi.yaml
    """
    from specls.parser import extractor

    found = _extract(extractor.references, read_document(source))
    if not found:
        info("No references in this document.")
        return

    get_output().print_table(
        ["Reference"], [[ref] for ref in found], title=f"References ({len(found)})"
    )


@inspect_app.command("info")
def inspect_info(source: str = _SOURCE_ARGUMENT) -> None:
    """Show API info (title, version, servers, tags, security schemes).

    Example::

        specls inspect info openapi.yaml
    """
    from specls.parser import extractor

    document = read_document(source)
    api_info = _extract(extractor.info, document)

    data: dict[str, Any] = {
        "title": api_info.title,
        "version": api_info.version,
        "openapi_version": _extract(extractor.version, document),
        "description": api_info.description or "-",
        "servers": [s.url for s in _extract(extractor.servers, document)],
        "tags": [t.name for t in _extract(extractor.tags, document)],
        "security_schemes": list(_extract(extractor.security_schemes, document).keys()),
        "paths": len(_extract(extractor.paths, document)),
        "components": len(_extract(extractor.components, document)),
    }
    get_output().print_record(data, title=api_info.title or source)
