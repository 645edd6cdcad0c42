from .hotkey import HotkeyListener, Shortcut, parse_shortcut
from .selection import SelectionCapture

__all__ = ["HotkeyListener", "Shortcut", "parse_shortcut", "SelectionCapture"]
