"""Tests for logging setup."""

import logging
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler

import pytest

from confdir.config.schemas import LoggingConfig
from confdir.infrastructure.logging import get_logger, setup_logging


@contextmanager
def preserved_root_logger():
    """Restore the root logger's handlers and level after setup_logging replaced them."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    try:
        yield root
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            if handler not in handlers:
                handler.close()
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)


class TestLogging:
    """Test logger access and host logging setup."""

    def test_get_logger_returns_named_stdlib_logger(self):
        logger = get_logger("confdir.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "confdir.test"

    def test_setup_stdout_logging(self):
        with preserved_root_logger() as root:
            setup_logging(LoggingConfig(level="DEBUG"))
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_setup_file_logging_from_dict(self, tmp_path):
        log_file = tmp_path / "logs" / "confdir.log"
        with preserved_root_logger() as root:
            logger = setup_logging(
                {"level": "INFO", "destination": "file", "file_path": str(log_file)}
            )
            assert [type(h) for h in root.handlers] == [RotatingFileHandler]

            logger.info("registry ready", configs=2)
            get_logger("confdir.test").warning("plain record")
            for handler in root.handlers:
                handler.flush()

        content = log_file.read_text()
        assert "registry ready" in content
        assert "plain record" in content

    def test_file_destination_requires_path(self):
        with preserved_root_logger():
            with pytest.raises(ValueError):
                setup_logging(LoggingConfig(destination="file"))
