"""
Centralized logging configuration.

Provides a configured logger instance with rotating file handlers.
Logs are written to <user config dir>/polish-language/logs/

Set LOG_TO_CONSOLE = True in config.py to also output logs to terminal.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from platformdirs import user_config_path

ROOT_LOGGER_NAME = "polishlanguage"


def get_log_dir() -> Path:
    """Get the platform-appropriate log directory."""
    from ..core.settings.config import APP_DIR_NAME

    log_dir = user_config_path(APP_DIR_NAME, appauthor=False, roaming=True) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


_logger_instance: Optional[logging.Logger] = None


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (defaults to the root "polishlanguage" logger).
              Module names like "src.polishlanguage.app" are transformed to
              "polishlanguage.app" to maintain proper logger hierarchy.

    Returns:
        Configured logger instance with file handler (and optional console handler)
    """
    global _logger_instance

    if name.startswith(f"src.{ROOT_LOGGER_NAME}."):
        name = name.replace("src.", "", 1)
    elif name == f"src.{ROOT_LOGGER_NAME}":
        name = ROOT_LOGGER_NAME

    # Child loggers inherit handlers, so the root must be configured first
    if _logger_instance is None:
        from ..core.settings.config import LOG_TO_CONSOLE, get_log_level

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)

        if root_logger.handlers:
            _logger_instance = root_logger
        else:
            level = get_log_level()
            root_logger.setLevel(level)

            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )

            log_file = get_log_dir() / "app.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

            if LOG_TO_CONSOLE:
                console_handler = logging.StreamHandler(sys.stderr)
                console_handler.setLevel(level)
                console_handler.setFormatter(formatter)
                root_logger.addHandler(console_handler)

            root_logger.propagate = False

            _logger_instance = root_logger

    if name == ROOT_LOGGER_NAME:
        return _logger_instance

    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Shutdown logging and close all file handlers to release file locks."""
    global _logger_instance
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    _logger_instance = None
