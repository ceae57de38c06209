"""Tests for specls.logging_setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from specls.exceptions import ConfigError
from specls.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def _restore_specls_logger():
    logger = logging.getLogger("specls")
    saved = (logger.level, logger.handlers[:], logger.propagate)
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(saved[0])
    for handler in saved[1]:
        logger.addHandler(handler)
    logger.propagate = saved[2]


class TestConfigureLogging:
    def test_level_is_applied(self) -> None:
        configure_logging("debug")
        logger = logging.getLogger("specls")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_writes_to_stderr_not_stdout(self, capsys) -> None:
        configure_logging("INFO")
        logging.getLogger("specls.server.session").info("opened document")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "opened document" in captured.err

    def test_below_level_is_dropped(self, capsys) -> None:
        configure_logging("WARNING")
        logging.getLogger("specls.query").info("quiet")
        assert "quiet" not in capsys.readouterr().err

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "specls.log"
        configure_logging("INFO", str(log_file))
        logging.getLogger("specls.server").info("to the file")
        for handler in logging.getLogger("specls").handlers:
            handler.flush()
        assert "INFO:specls.server:to the file" in log_file.read_text(encoding="utf-8")

    def test_reconfiguring_replaces_handler(self) -> None:
        configure_logging("INFO")
        configure_logging("ERROR")
        logger = logging.getLogger("specls")
        assert len(logger.handlers) == 1
        assert logger.level == logging.ERROR

    def test_unknown_level(self) -> None:
        with pytest.raises(ConfigError, match="Unknown log level: LOUD"):
            configure_logging("LOUD")
