"""Language server: document session, range mapping and pygls handlers."""

from specls.server.session import DocumentSession, ValidationOutcome

__all__ = ["DocumentSession", "ValidationOutcome"]
