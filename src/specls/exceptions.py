"""Exception hierarchy for specls.

All exceptions inherit from :class:`SpeclsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specls.exit_codes`.
The CLI entry point in :func:`specls.app.main` catches ``SpeclsError`` and
exits with the appropriate code.

Inside the analysis core these exceptions never cross the parse boundary:
:meth:`~specls.parser.validator.OpenAPIParser.parse` converts them into
:class:`~specls.models.ParserResult` data.

Subclass hierarchy::

    SpeclsError (exit 1)
    +-- DecodeError         (exit 7)
    +-- TypeMismatch        (exit 7)
    +-- SpecParseError      (exit 7)
    +-- ServerError         (exit 5)
    +-- ConfigError         (exit 1)
"""

from specls.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_SERVER_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SpeclsError(Exception):
    """Base exception for all specls errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class DecodeError(SpeclsError):
    """Raised when text is neither well-formed JSON nor well-formed YAML."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class TypeMismatch(SpeclsError):
    """Raised when a decoded value is present but has the wrong shape.

    For example a ``paths`` section that decodes to a list instead of a
    mapping. Absent sections are never a mismatch; they read as empty.

    Args:
        where: Dotted location of the offending value (``"paths"``).
        expected: Name of the expected shape (``"mapping"``).
        actual: The value that was found.
    """

    exit_code = EXIT_SPEC_PARSE_ERROR

    def __init__(self, where: str, expected: str, actual: object):
        self.where = where
        self.expected = expected
        self.actual_type = type(actual).__name__
        super().__init__(
            f"Expected {expected} at '{where}', got {self.actual_type}"
        )


class SpecParseError(SpeclsError):
    """Raised when a document source (file, URL, stdin) cannot be read."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ServerError(SpeclsError):
    """Raised when the language server fails to start on the requested transport."""

    exit_code = EXIT_SERVER_ERROR


class ConfigError(SpeclsError):
    """Raised for configuration problems (invalid JSON, bad setting values)."""

    exit_code = EXIT_GENERIC_FAILURE
