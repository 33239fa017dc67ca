"""Translation of Qt key events into logical characters for the session."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt


def key_to_char(key: int, text: str) -> Optional[str]:
    """Map a key press to the character fed to the session, or None to drop it."""
    if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
        return "\n"
    if key == Qt.Key.Key_Tab:
        return "\t"
    if key == Qt.Key.Key_Space:
        return " "
    if len(text) == 1 and text.isprintable():
        return text
    return None


def is_quit_key(key: int, modifiers: Qt.KeyboardModifier) -> bool:
    """Escape or Ctrl+C ends the game."""
    if key == Qt.Key.Key_Escape:
        return True
    return key == Qt.Key.Key_C and bool(modifiers & Qt.KeyboardModifier.ControlModifier)
