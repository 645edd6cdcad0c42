"""Platform-specific utilities for cross-platform compatibility."""

import os
import platform
import shutil
import subprocess
from typing import List, Optional, Sequence


def get_platform() -> str:
    system = platform.system()
    if system == "Darwin":
        return "macos"
    return system.lower()


def is_wayland() -> bool:
    return get_platform() == "linux" and bool(os.environ.get("WAYLAND_DISPLAY"))


def get_subprocess_kwargs(**kwargs) -> dict:
    """Add the flags that keep helper commands from flashing a console on Windows."""
    if get_platform() == "windows":
        kwargs.setdefault("creationflags", getattr(subprocess, "CREATE_NO_WINDOW", 0))
    return kwargs


def find_command(candidates: Sequence[List[str]]) -> Optional[List[str]]:
    """Return the first candidate command whose executable is on PATH."""
    for command in candidates:
        if shutil.which(command[0]):
            return list(command)
    return None
