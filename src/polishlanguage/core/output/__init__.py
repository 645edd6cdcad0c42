from .clipboard import ClipboardController
from .sound import play_completion_sound

__all__ = ["ClipboardController", "play_completion_sound"]
