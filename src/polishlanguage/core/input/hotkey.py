"""
Global hotkeys for the polish and translate operations.

Shortcuts are stored as accelerator strings ("CmdOrCtrl+Alt+P") and
registered through pynput's GlobalHotKeys.
"""

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Optional

from PySide6.QtCore import QObject, Signal

from ...utils.logger import get_logger
from ...utils.platform import get_platform
from ..settings import Settings

logger = get_logger(__name__)

_MODIFIER_ALIASES = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "alt": "alt",
    "option": "alt",
    "shift": "shift",
    "cmd": "cmd",
    "command": "cmd",
    "super": "cmd",
    "meta": "cmd",
}
_PLATFORM_MODIFIERS = ("cmdorctrl", "commandorcontrol")
_MODIFIER_ORDER = ("ctrl", "alt", "shift", "cmd")

_NAMED_KEYS = {
    "space",
    "enter",
    "tab",
    "esc",
    "backspace",
    "delete",
    "insert",
    "home",
    "end",
    "page_up",
    "page_down",
    "up",
    "down",
    "left",
    "right",
} | {f"f{n}" for n in range(1, 21)}
_KEY_ALIASES = {
    "return": "enter",
    "escape": "esc",
    "pageup": "page_up",
    "pagedown": "page_down",
}


@dataclass(frozen=True)
class Shortcut:
    modifiers: FrozenSet[str]
    key: str

    def to_pynput(self) -> str:
        parts = [f"<{mod}>" for mod in _MODIFIER_ORDER if mod in self.modifiers]
        parts.append(self.key if len(self.key) == 1 else f"<{self.key}>")
        return "+".join(parts)

    def to_display_string(self) -> str:
        parts = [mod.capitalize() for mod in _MODIFIER_ORDER if mod in self.modifiers]
        parts.append(self.key.upper() if len(self.key) == 1 else self.key.capitalize())
        return " + ".join(parts)


def parse_shortcut(accelerator: str, platform: Optional[str] = None) -> Shortcut:
    """
    Parse an accelerator string such as "CmdOrCtrl+Alt+P".

    "CmdOrCtrl" resolves to Cmd on macOS and Ctrl elsewhere.
    Raises ValueError unless the string names exactly one non-modifier key.
    """
    platform = platform or get_platform()
    modifiers = set()
    key: Optional[str] = None

    for token in accelerator.split("+"):
        name = token.strip().lower()
        if not name:
            raise ValueError(f"Empty key in shortcut {accelerator!r}")

        if name in _PLATFORM_MODIFIERS:
            modifiers.add("cmd" if platform == "macos" else "ctrl")
        elif name in _MODIFIER_ALIASES:
            modifiers.add(_MODIFIER_ALIASES[name])
        else:
            if key is not None:
                raise ValueError(f"Shortcut {accelerator!r} has more than one key")
            name = _KEY_ALIASES.get(name, name)
            if len(name) != 1 and name not in _NAMED_KEYS:
                raise ValueError(f"Unknown key {token.strip()!r} in {accelerator!r}")
            key = name

    if key is None:
        raise ValueError(f"Shortcut {accelerator!r} has no key")

    return Shortcut(modifiers=frozenset(modifiers), key=key)


class HotkeyListener(QObject):
    """
    Listens for the polish and translate hotkeys.

    Signals are emitted from the pynput thread; Qt queues them to the
    receiver's thread.

    Signals:
        polish_triggered: Emitted when the polish hotkey is pressed
        translate_triggered: Emitted when the translate hotkey is pressed
    """

    polish_triggered = Signal()
    translate_triggered = Signal()

    def __init__(self, settings: Settings, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._bindings: Dict[str, Callable[[], None]] = {}
        self._setup_hotkeys(settings)
        self._impl = _PynputHotkeyListenerImpl(self)

    def update_settings(self, settings: Settings) -> None:
        self._setup_hotkeys(settings)
        self._impl.restart()

    def _setup_hotkeys(self, settings: Settings) -> None:
        self._bindings = {}
        for accelerator, signal in (
            (settings.shortcut_polish, self.polish_triggered),
            (settings.shortcut_translate, self.translate_triggered),
        ):
            try:
                shortcut = parse_shortcut(accelerator)
            except ValueError as e:
                logger.error(f"Failed to register shortcut: {e}")
                continue
            combo = shortcut.to_pynput()
            if combo in self._bindings:
                logger.error(f"Shortcut {accelerator!r} is already registered")
                continue
            self._bindings[combo] = signal.emit
            logger.info(f"Registered shortcut {shortcut.to_display_string()}")

    @property
    def bindings(self) -> Dict[str, Callable[[], None]]:
        return dict(self._bindings)

    def start(self) -> None:
        self._impl.start()

    def stop(self) -> None:
        self._impl.stop()


class _PynputHotkeyListenerImpl:
    """
    Pynput-based hotkey listener.
    """

    def __init__(self, listener: HotkeyListener):
        self._listener = listener
        self._hotkeys = None

    def start(self) -> None:
        from pynput import keyboard

        bindings = self._listener.bindings
        if not bindings:
            logger.warning("No valid shortcuts configured, hotkeys disabled")
            return

        self._hotkeys = keyboard.GlobalHotKeys(bindings)
        self._hotkeys.start()

        if hasattr(self._hotkeys, "IS_TRUSTED"):
            logger.info(f"Keyboard listener IS_TRUSTED: {self._hotkeys.IS_TRUSTED}")
            if not self._hotkeys.IS_TRUSTED:
                logger.warning(
                    "Hotkey listener is NOT TRUSTED. Accessibility permissions not granted."
                )

    def stop(self) -> None:
        if self._hotkeys:
            self._hotkeys.stop()
            self._hotkeys = None

    def restart(self) -> None:
        self.stop()
        self.start()
