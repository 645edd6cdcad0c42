"""
Developer-facing constants.

User preferences live in settings.json (see settings.py); the values here are
edited in source when running locally.
"""

import logging
from typing import Optional

APP_DIR_NAME = "polish-language"  # Directory name used for config and logs

# =============================================================================
# LOGGING
# =============================================================================
LOG_LEVEL = "DEBUG"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_TO_CONSOLE = True  # Also write log records to stderr
# =============================================================================

# =============================================================================
# PIPELINE
# =============================================================================
NOTIFICATION_PREVIEW_LENGTH = 100  # Max characters of the result shown in a notification
CAPTURE_COPY_DELAY_SECONDS = 0.15  # Wait after the copy keystroke before reading the clipboard
CLIPBOARD_TIMEOUT_SECONDS = 2  # Per call to pbcopy/xclip/clip
REQUEST_TIMEOUT_SECONDS: Optional[float] = None  # None waits for the provider indefinitely
WORKER_SHUTDOWN_TIMEOUT_MS = 2000  # Max wait per in-flight run when quitting
# =============================================================================


def get_log_level() -> int:
    """Get the logging level as an integer."""
    return getattr(logging, LOG_LEVEL.upper(), logging.INFO)
