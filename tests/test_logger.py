"""
Tests for logging infrastructure.

Verifies logger configuration, file creation, and rotation.
"""

import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest

import polishlanguage.utils.logger as logger_module
from polishlanguage.utils.logger import (
    ROOT_LOGGER_NAME,
    get_log_dir,
    get_logger,
    shutdown_logging,
)


@pytest.fixture
def fresh_logging(tmp_path):
    """Re-initialize the application logger inside tmp_path."""
    shutdown_logging()
    with patch(
        "polishlanguage.utils.logger.user_config_path", return_value=tmp_path
    ):
        yield tmp_path
        shutdown_logging()


class TestLoggerConfiguration:
    """Tests for logger setup and configuration."""

    def test_get_logger_returns_logger(self):
        logger = get_logger("test")
        assert isinstance(logger, logging.Logger)

    def test_get_logger_singleton(self):
        logger1 = get_logger(ROOT_LOGGER_NAME)
        logger2 = get_logger(ROOT_LOGGER_NAME)
        assert logger1 is logger2

    def test_src_prefix_stripped(self):
        logger = get_logger("src.polishlanguage.core.pipeline")
        assert logger.name == "polishlanguage.core.pipeline"

    def test_log_directory_creation(self, fresh_logging):
        log_dir = get_log_dir()

        assert log_dir.exists()
        assert log_dir.is_dir()
        assert log_dir.name == "logs"

    def test_logger_writes_to_file(self, fresh_logging):
        logger = get_logger(ROOT_LOGGER_NAME)
        logger.info("Test message")

        log_file = fresh_logging / "logs" / "app.log"
        assert log_file.exists()

        content = log_file.read_text(encoding="utf-8")
        assert "Test message" in content
        assert "INFO" in content

    def test_child_logger_uses_root_handlers(self, fresh_logging):
        get_logger("polishlanguage.core.settings").warning("Child message")

        content = (fresh_logging / "logs" / "app.log").read_text(encoding="utf-8")
        assert "polishlanguage.core.settings - WARNING - Child message" in content

    def test_shutdown_closes_handlers(self, fresh_logging):
        get_logger(ROOT_LOGGER_NAME)
        shutdown_logging()

        assert logging.getLogger(ROOT_LOGGER_NAME).handlers == []
        assert logger_module._logger_instance is None


class TestLogRotation:
    """Tests for log rotation functionality."""

    def test_rotating_handler_configured(self, fresh_logging):
        logger = get_logger(ROOT_LOGGER_NAME)

        handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 10 * 1024 * 1024
        assert handlers[0].backupCount == 5

    def test_log_rotation_when_size_exceeded(self, fresh_logging):
        log_file = fresh_logging / "logs" / "app.log"
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file, maxBytes=1024, backupCount=2, encoding="utf-8"
        )

        with patch(
            "polishlanguage.utils.logger.RotatingFileHandler", return_value=handler
        ):
            logger = get_logger(ROOT_LOGGER_NAME)

        for i in range(100):
            logger.info(f"Test message {i} with some padding to increase size")

        assert log_file.exists()
        assert (fresh_logging / "logs" / "app.log.1").exists()
