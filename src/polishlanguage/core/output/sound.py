"""Completion sound played after a successful run."""

import subprocess
from pathlib import Path
from typing import List, Optional

from ...utils.logger import get_logger
from ...utils.platform import find_command, get_platform, get_subprocess_kwargs

logger = get_logger(__name__)

MACOS_SOUND = "/System/Library/Sounds/Glass.aiff"
FREEDESKTOP_SOUNDS = (
    "/usr/share/sounds/freedesktop/stereo/complete.oga",
    "/usr/share/sounds/freedesktop/stereo/message.oga",
)


def _linux_sound_command() -> Optional[List[str]]:
    sound_file = next((p for p in FREEDESKTOP_SOUNDS if Path(p).exists()), None)
    if sound_file is None:
        return None
    return find_command([["paplay", sound_file], ["pw-play", sound_file]])


def play_completion_sound() -> None:
    """Start the platform completion sound without waiting for it to finish."""
    system = get_platform()

    if system == "windows":
        import winsound

        winsound.MessageBeep(winsound.MB_OK)
        return

    if system == "macos":
        command = ["afplay", MACOS_SOUND]
    else:
        command = _linux_sound_command()

    if command is None:
        logger.debug("No completion sound available on this platform")
        return

    try:
        subprocess.Popen(
            command,
            **get_subprocess_kwargs(
                stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
            ),
        )
    except OSError as e:
        logger.warning(f"Failed to play completion sound: {e}")
