"""
Clipboard access through the platform clipboard commands.

Uses subprocess rather than a GUI toolkit clipboard so it can be called from
worker threads.
"""

import subprocess
import threading
from typing import Dict, List, Optional

from ...utils.logger import get_logger
from ...utils.platform import (
    find_command,
    get_platform,
    get_subprocess_kwargs,
    is_wayland,
)
from ..errors import ClipboardError
from ..settings.config import CLIPBOARD_TIMEOUT_SECONDS

logger = get_logger(__name__)

# Serializes clipboard writes with the save/copy/restore done by selection capture
CLIPBOARD_LOCK = threading.RLock()

_COPY_COMMANDS: Dict[str, List[List[str]]] = {
    "macos": [["pbcopy"]],
    "windows": [["clip"]],
    "wayland": [["wl-copy"]],
    "linux": [["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]],
}

_PASTE_COMMANDS: Dict[str, List[List[str]]] = {
    "macos": [["pbpaste"]],
    "windows": [
        [
            "powershell",
            "-NoProfile",
            "-Command",
            "[Console]::OutputEncoding = [Text.Encoding]::UTF8; Get-Clipboard -Raw",
        ]
    ],
    "wayland": [["wl-paste", "--no-newline"]],
    "linux": [
        ["xclip", "-selection", "clipboard", "-o"],
        ["xsel", "--clipboard", "--output"],
    ],
}

_PRIMARY_SELECTION_COMMANDS: Dict[str, List[List[str]]] = {
    "wayland": [["wl-paste", "--primary", "--no-newline"]],
    "linux": [["xclip", "-selection", "primary", "-o"], ["xsel", "--primary", "--output"]],
}


def _platform_key() -> str:
    if is_wayland():
        return "wayland"
    return get_platform()


class ClipboardController:

    def __init__(self):
        key = _platform_key()
        self._system = get_platform()
        self._copy_cmd = find_command(_COPY_COMMANDS.get(key, []))
        self._paste_cmd = find_command(_PASTE_COMMANDS.get(key, []))
        self._primary_cmd = find_command(_PRIMARY_SELECTION_COMMANDS.get(key, []))

        if self._copy_cmd is None:
            logger.warning(f"No clipboard command found for platform '{key}'")

    @property
    def supports_primary_selection(self) -> bool:
        return self._primary_cmd is not None

    def write_text(self, text: str) -> None:
        if self._copy_cmd is None:
            raise ClipboardError("No clipboard command available")

        logger.debug(
            f"Writing to clipboard: '{text[:50]}{'...' if len(text) > 50 else ''}'"
        )

        # clip.exe only reads Unicode correctly from UTF-16 with a BOM
        data = text.encode("utf-16" if self._system == "windows" else "utf-8")

        try:
            with CLIPBOARD_LOCK:
                subprocess.run(
                    self._copy_cmd,
                    **get_subprocess_kwargs(
                        input=data, timeout=CLIPBOARD_TIMEOUT_SECONDS, check=True
                    ),
                )
        except (
            subprocess.TimeoutExpired,
            subprocess.CalledProcessError,
            OSError,
        ) as e:
            raise ClipboardError(f"Failed to set clipboard: {e}") from e

    def read_text(self) -> str:
        return self._run_read(self._paste_cmd, "clipboard")

    def read_primary_selection(self) -> str:
        return self._run_read(self._primary_cmd, "primary selection")

    def _run_read(self, command: Optional[List[str]], source: str) -> str:
        if command is None:
            raise ClipboardError(f"No command available to read the {source}")

        try:
            result = subprocess.run(
                command,
                **get_subprocess_kwargs(
                    capture_output=True, timeout=CLIPBOARD_TIMEOUT_SECONDS
                ),
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            raise ClipboardError(f"Failed to read {source}: {e}") from e

        # xclip exits non-zero when the selection is empty
        if result.returncode != 0:
            return ""

        text = result.stdout.decode("utf-8", errors="replace")
        if self._system == "windows":
            text = text.rstrip("\r\n")
        return text
