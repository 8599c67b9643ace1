"""Keyboard input handling for blessed keystrokes."""

import re
from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from blessed
    is_ctrl: bool = False

    @property
    def is_printable(self) -> bool:
        return self.key_type == KeyType.REGULAR and len(self.value) == 1 and self.value.isprintable()


# blessed sequence names for the keys the editor knows about
SEQUENCE_NAMES = {
    'KEY_UP': 'up',
    'KEY_DOWN': 'down',
    'KEY_LEFT': 'left',
    'KEY_RIGHT': 'right',
    'KEY_ENTER': 'enter',
    'KEY_BACKSPACE': 'backspace',
    'KEY_DELETE': 'delete',
    'KEY_HOME': 'home',
    'KEY_END': 'end',
    'KEY_PGUP': 'page_up',
    'KEY_PGDOWN': 'page_down',
    'KEY_INSERT': 'insert',
    'KEY_ESCAPE': 'escape',
}

_CTRL_NAME = re.compile(r'^KEY_CTRL_([A-Z])$')


class KeyboardHandler:
    """Turns terminal keystrokes into KeyEvents.

    ``get_key_event`` is the only place the editor blocks; tests replace
    the terminal (or the whole handler) to feed scripted keystrokes.
    """

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Block for the next key and parse it; None on timeout."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a blessed key into a KeyEvent.

        Args:
            key: blessed.keyboard.Keystroke object, or a plain string

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        if key_str == EditorConstants.RESIZE_TOKEN:
            return KeyEvent(key_type=KeyType.SPECIAL, value='resize', raw=key_str)

        name = getattr(key, 'name', None)
        if name:
            if name in SEQUENCE_NAMES:
                return KeyEvent(key_type=KeyType.SPECIAL, value=SEQUENCE_NAMES[name], raw=key_str)
            m = _CTRL_NAME.match(name)
            if m:
                return self._ctrl_event(m.group(1).lower(), key_str)
            if getattr(key, 'is_sequence', False):
                # Unbound sequence (F-keys, modified arrows, ...)
                value = name[4:].lower() if name.startswith('KEY_') else name.lower()
                return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=key_str)

        # Single-byte keys as they arrive in raw mode
        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                return self._ctrl_event(chr(ord('a') + o - 1), key_str)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
        elif key_str.startswith('\x1b'):
            # Escape sequence blessed could not name
            return KeyEvent(key_type=KeyType.SPECIAL, value='unknown', raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _ctrl_event(self, letter: str, raw: str) -> KeyEvent:
        # Ctrl-J / Ctrl-M are what terminals send for Enter, Ctrl-H for Backspace
        if letter in ('j', 'm'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=raw)
        if letter == 'h':
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=raw)
        return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=raw, is_ctrl=True)
