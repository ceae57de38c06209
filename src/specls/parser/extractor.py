"""Read-only projections from a decoded API description into typed views.

Every function here takes the decoded document (as returned by
:func:`~specls.parser.loader.decode`) and returns models from
:mod:`specls.models`. They never mutate the document and never fail on a
missing optional section: an absent ``paths`` reads as no paths, an absent
``components`` as no components. A section that is present with the wrong
shape raises :class:`~specls.exceptions.TypeMismatch`.

Unlike a ``$ref``-resolving pipeline, extraction works on the document as
written, so reference objects stay in place and :func:`references` can list
them.
"""

from __future__ import annotations

from typing import Any

from specls.models import (
    APIInfo,
    Component,
    HTTPMethod,
    PathEntry,
    SecurityScheme,
    ServerInfo,
    Tag,
)
from specls.parser.values import as_mapping, get_mapping, get_sequence

# Fixed verb order used for every operation scan
HTTP_METHODS: tuple[str, ...] = tuple(m.value for m in HTTPMethod)


def _root(document: Any) -> dict[str, Any]:
    if document is None:
        return {}
    return as_mapping(document, "$")


def _text(value: Any) -> str:
    """Render a scalar as text; YAML decodes ``version: 1.0`` as a float."""
    if value is None:
        return ""
    return str(value)


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


def version(document: Any) -> str:
    """Return the ``openapi`` version, else the legacy ``swagger`` one, else ``""``."""
    root = _root(document)
    return _text(root.get("openapi") or root.get("swagger"))


def info(document: Any) -> APIInfo:
    """Extract the *Info Object*, defaulting absent title/version to ``""``."""
    section = get_mapping(_root(document), "info")
    contact = section.get("contact")
    license_info = section.get("license")
    return APIInfo(
        title=_text(section.get("title")),
        version=_text(section.get("version")),
        description=_optional_text(section.get("description")),
        contact=contact if isinstance(contact, dict) else None,
        license=license_info if isinstance(license_info, dict) else None,
    )


def servers(document: Any) -> list[ServerInfo]:
    """Extract the ``servers`` array. Entries that are not mappings are skipped."""
    result: list[ServerInfo] = []
    for server in get_sequence(_root(document), "servers"):
        if not isinstance(server, dict):
            continue
        variables = server.get("variables")
        result.append(
            ServerInfo(
                url=_text(server.get("url")) or "/",
                description=_optional_text(server.get("description")),
                variables=variables if isinstance(variables, dict) else None,
            )
        )
    return result


def components(document: Any) -> list[Component]:
    """Flatten ``components`` into one :class:`~specls.models.Component` per entry.

    The outer key is the category (``schemas``, ``responses``, ...), the
    inner key the component name. Order follows the document: category first,
    then name.
    """
    section = get_mapping(_root(document), "components")
    result: list[Component] = []

    for category, entries in section.items():
        if entries is None:
            continue
        entries = as_mapping(entries, f"components.{category}")
        for name, definition in entries.items():
            properties = None
            required = None
            if isinstance(definition, dict):
                if isinstance(definition.get("properties"), dict):
                    properties = {str(k): v for k, v in definition["properties"].items()}
                if isinstance(definition.get("required"), list):
                    required = [str(r) for r in definition["required"]]
            result.append(
                Component(
                    name=str(name),
                    type=str(category),
                    properties=properties,
                    required=required,
                )
            )

    return result


def operations(path_item: Any) -> dict[str, Any]:
    """Pick the operations out of a decoded path item.

    Only the fixed verb set is recognised; keys are matched
    case-insensitively and anything else (``parameters``, ``summary``,
    extensions) is ignored. A declared verb is kept even when its
    operation is an empty mapping; only a null value is skipped.
    """
    if not isinstance(path_item, dict):
        return {}
    lowered = {str(key).lower(): value for key, value in path_item.items()}
    return {verb: lowered[verb] for verb in HTTP_METHODS if lowered.get(verb) is not None}


def paths(document: Any) -> list[PathEntry]:
    """Extract one :class:`~specls.models.PathEntry` per key under ``paths``."""
    section = get_mapping(_root(document), "paths")
    return [
        PathEntry(path=str(path), methods=operations(path_item))
        for path, path_item in section.items()
    ]


def references(document: Any) -> list[str]:
    """Collect every ``$ref`` string in the document, depth-first.

    Any mapping with a string ``$ref`` contributes it, and the walk still
    continues into all of that mapping's values, so a reference object with
    sibling keys is fully traversed. The walk uses an explicit stack and
    visits each container once, so aliased YAML nodes are not rescanned.
    """
    refs: list[str] = []
    seen: set[int] = set()
    stack: list[Any] = [document]

    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            if id(current) in seen:
                continue
            seen.add(id(current))
            ref = current.get("$ref")
            if isinstance(ref, str) and ref:
                refs.append(ref)
            stack.extend(reversed(list(current.values())))
        elif isinstance(current, list):
            if id(current) in seen:
                continue
            seen.add(id(current))
            stack.extend(reversed(current))

    return refs


def tags(document: Any) -> list[Tag]:
    """Extract the top-level ``tags`` list."""
    result: list[Tag] = []
    for tag in get_sequence(_root(document), "tags"):
        if isinstance(tag, dict) and tag.get("name") is not None:
            result.append(
                Tag(name=str(tag["name"]), description=_optional_text(tag.get("description")))
            )
    return result


def security_schemes(document: Any) -> dict[str, SecurityScheme]:
    """Extract security scheme definitions from ``components.securitySchemes``.

    Returns:
        A dict mapping scheme name to :class:`~specls.models.SecurityScheme`.
        Empty when no security schemes are declared.
    """
    section = get_mapping(_root(document), "components")
    schemes_raw = get_mapping(section, "securitySchemes", "components.securitySchemes")
    schemes: dict[str, SecurityScheme] = {}

    for name, scheme_data in schemes_raw.items():
        if not isinstance(scheme_data, dict):
            continue
        flows = scheme_data.get("flows")

        schemes[str(name)] = SecurityScheme(
            name=str(name),
            type=_text(scheme_data.get("type")),
            description=_optional_text(scheme_data.get("description")),
            in_name=_optional_text(scheme_data.get("name")),
            in_location=_optional_text(scheme_data.get("in")),
            scheme=_optional_text(scheme_data.get("scheme")),
            bearer_format=_optional_text(scheme_data.get("bearerFormat")),
            flows=flows if isinstance(flows, dict) else None,
            openid_connect_url=_optional_text(scheme_data.get("openIdConnectUrl")),
        )

    return schemes


def parameters_by_path(document: Any, path: str) -> list[Any]:
    """List the raw parameters declared for *path*.

    Path-level parameters come first, followed by each operation's own
    parameters in verb order. No merging or ``$ref`` resolution is done.
    """
    path_item = get_mapping(_root(document), "paths").get(path)
    if not isinstance(path_item, dict):
        return []

    parameters: list[Any] = list(get_sequence(path_item, "parameters", f"paths.{path}.parameters"))
    for verb, operation in operations(path_item).items():
        if isinstance(operation, dict):
            parameters.extend(
                get_sequence(operation, "parameters", f"paths.{path}.{verb}.parameters")
            )
    return parameters


def responses_by_path(document: Any, path: str, method: str) -> dict[str, Any]:
    """Return the raw ``responses`` mapping of one operation, or ``{}``."""
    path_item = get_mapping(_root(document), "paths").get(path)
    operation = operations(path_item).get(method.lower())
    if not isinstance(operation, dict):
        return {}
    return get_mapping(operation, "responses", f"paths.{path}.{method.lower()}.responses")
