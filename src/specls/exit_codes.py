"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specls.exceptions.SpeclsError` subclass.
CI jobs that run ``specls check`` can inspect the exit code to tell a
document with diagnostics apart from a crash without parsing stderr.

Example::

    $ specls check openapi.yaml
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the document has diagnostics
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SERVER_ERROR = 5
"""The language server could not be started or stopped unexpectedly."""

EXIT_SPEC_PARSE_ERROR = 7
"""The API description could not be decoded or failed structural validation."""
