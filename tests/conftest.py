"""
Pytest configuration and shared fixtures.

Qt tests run on the offscreen platform; Qt objects are flushed between tests
to prevent segfaults from dangling references.
"""
import logging
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from unittest.mock import patch

import pytest
from PySide6.QtWidgets import QApplication


@pytest.fixture(autouse=True)
def cleanup_qt_objects(qtbot, request):
    """Process pending Qt events after each test."""
    yield

    app = QApplication.instance()
    if app:
        app.processEvents()


@pytest.fixture
def config_dir(tmp_path):
    """Point settings persistence at a temporary directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    with patch(
        "polishlanguage.core.settings.settings.get_config_dir",
        return_value=directory,
    ):
        yield directory


@pytest.fixture
def propagating_logs(monkeypatch):
    """Let caplog see records from the application logger."""
    from polishlanguage.utils.logger import ROOT_LOGGER_NAME, get_logger

    get_logger()
    monkeypatch.setattr(logging.getLogger(ROOT_LOGGER_NAME), "propagate", True)
