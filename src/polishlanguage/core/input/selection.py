"""
Reads the text currently selected in the focused application.

On X11/Wayland the PRIMARY selection already holds it. Elsewhere a copy
keystroke is simulated and the clipboard is read, then restored.
"""

import time
from typing import Optional

from ...utils.logger import get_logger
from ...utils.platform import get_platform
from ..errors import CaptureError, ClipboardError
from ..output.clipboard import CLIPBOARD_LOCK, ClipboardController
from ..settings.config import CAPTURE_COPY_DELAY_SECONDS

logger = get_logger(__name__)


class SelectionCapture:

    def __init__(
        self,
        clipboard: Optional[ClipboardController] = None,
        copy_delay: float = CAPTURE_COPY_DELAY_SECONDS,
    ):
        self._clipboard = clipboard or ClipboardController()
        self._copy_delay = copy_delay
        self._keyboard = None

    def capture_selected_text(self) -> str:
        if self._clipboard.supports_primary_selection:
            try:
                return self._clipboard.read_primary_selection()
            except ClipboardError as e:
                raise CaptureError(str(e)) from e

        with CLIPBOARD_LOCK:
            return self._capture_via_copy()

    def _capture_via_copy(self) -> str:
        try:
            previous = self._clipboard.read_text()
        except ClipboardError as e:
            logger.debug(f"Could not save clipboard before copy: {e}")
            previous = None

        try:
            # Empty clipboard means "nothing selected" after the copy
            self._clipboard.write_text("")
            self._send_copy_keystroke()
            time.sleep(self._copy_delay)
            selected = self._clipboard.read_text()
        except ClipboardError as e:
            raise CaptureError(str(e)) from e
        except Exception as e:
            raise CaptureError(f"Failed to simulate copy: {e}") from e
        finally:
            if previous:
                try:
                    self._clipboard.write_text(previous)
                except ClipboardError as e:
                    logger.warning(f"Failed to restore clipboard: {e}")

        return selected

    def _send_copy_keystroke(self) -> None:
        from pynput.keyboard import Controller as KeyboardController
        from pynput.keyboard import Key

        if self._keyboard is None:
            self._keyboard = KeyboardController()

        # The hotkey's own modifiers may still be held down
        for key in (Key.alt, Key.shift):
            self._keyboard.release(key)

        copy_key = Key.cmd if get_platform() == "macos" else Key.ctrl
        with self._keyboard.pressed(copy_key):
            self._keyboard.tap("c")
