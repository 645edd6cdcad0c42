# Polish Language - Hotkey Text Polishing and Translation

"""
Desktop utility that rewrites the currently selected text with a language model.
Press a hotkey to polish or translate the selection; the result lands on the clipboard.
"""

__version__ = "0.1.0"
__app_name__ = "Polish Language"
