"""API description parser -- decode text, check structure, extract entities.

This sub-package turns raw JSON or YAML text into the decoded document and
the typed views built from it.

Typical usage::

    from specls.parser import decode, extractor
    from specls.parser.validator import OpenAPIParser

    result = OpenAPIParser().parse(text)
    if result.document is not None:
        for component in extractor.components(result.document):
            print(component.type, component.name)

Sub-modules:

* :mod:`~specls.parser.loader` -- format detection, decoding, and reading
  text from a URL, file or stdin.
* :mod:`~specls.parser.values` -- typed accessors over the decoded tree.
* :mod:`~specls.parser.diagnostics` -- the per-parse diagnostic collector.
* :mod:`~specls.parser.validator` -- :class:`OpenAPIParser`, the parse
  boundary with presence checks. Imported explicitly since it depends on
  :mod:`specls.grammar`.
* :mod:`~specls.parser.extractor` -- projections into
  :mod:`specls.models` types.
"""

from specls.parser import extractor
from specls.parser.diagnostics import DiagnosticCollector
from specls.parser.loader import decode, detect_format, load_source

__all__ = [
    "DiagnosticCollector",
    "decode",
    "detect_format",
    "extractor",
    "load_source",
]
