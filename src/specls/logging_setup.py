"""Logging configuration for the specls CLI and language server.

Modules log through ``logging.getLogger(__name__)``; this module only decides
where the ``specls`` logger writes. Logs never go to stdout: in stdio mode
stdout carries the language server protocol stream.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from specls.exceptions import ConfigError

_LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Route ``specls`` log records to stderr or *log_file* at *level*.

    Calling it again replaces the previously installed handler.

    Raises:
        ConfigError: If *level* is not a known logging level name.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigError(f"Unknown log level: {level}")

    logger = logging.getLogger("specls")
    logger.setLevel(numeric)
    for existing in logger.handlers[:]:
        logger.removeHandler(existing)
        existing.close()

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
