"""Keyboard input handling: curtsies tokens and raw escape sequences to key events."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from the input source
    is_alt: bool = False
    is_ctrl: bool = False
    is_sequence: bool = False

    def describe(self) -> str:
        """Human-readable key name for error messages."""
        if self.key_type == KeyType.CTRL:
            return f"Ctrl-{self.value}"
        if self.key_type == KeyType.ALT:
            return f"Alt-{self.value}"
        if self.key_type == KeyType.REGULAR and len(self.value) == 1 and not self.value.isprintable():
            return f"0x{ord(self.value):02x}"
        return self.value


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert',
}

# CSI final byte -> arrow name
_ARROWS = {'A': 'up', 'B': 'down', 'C': 'right', 'D': 'left'}


def regular(ch: str) -> KeyEvent:
    return KeyEvent(key_type=KeyType.REGULAR, value=ch, raw=ch)


def special(name: str) -> KeyEvent:
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=name, is_sequence=True)


def ctrl(ch: str) -> KeyEvent:
    return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=chr(ord(ch) & 0x1f), is_ctrl=True)


def alt(name: str) -> KeyEvent:
    return KeyEvent(key_type=KeyType.ALT, value=name, raw='\x1b' + name, is_alt=True)


ESCAPE = KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')


class KeyboardHandler:
    """Reads keys from the terminal and maps them to KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event; None when nothing arrived before ``timeout``."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token or a raw key string into a KeyEvent."""
        key_str = str(key)

        # curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Esc+m>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if key_str.startswith('\x1b') and len(key_str) > 1:
            return self._parse_escape_sequence(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o == 127 or o == 8:
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if key_str == '\t':
                return regular('\t')
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + o - 1),
                                raw=key_str, is_ctrl=True)
            if key_str == '\x1b':
                return ESCAPE

        return regular(key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        lower = name.lower()
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        lower = lower.replace('+', '-')
        parts = lower.split('-') if '-' in lower and lower != '-' else [lower]
        base = parts[-1]
        mods = set(parts[:-1])
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')
        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        if base in ('space', 'spacebar', 'spc') and not mods:
            return regular(' ')
        if base == 'tab' and not mods:
            return regular('\t')
        if 'ctrl' in mods and len(base) == 1:
            # Ctrl-J / Ctrl-M arrive for Enter
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            # Keep letter case for Alt-letter so Alt-M and Alt-m stay distinct
            value = name[-1] if len(base) == 1 else base
            return KeyEvent(key_type=KeyType.ALT, value=value, raw=key_str, is_alt=True)
        if base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
        if base in ('esc', 'escape'):
            return ESCAPE
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)

    def _parse_escape_sequence(self, key_str: str) -> KeyEvent:
        """Decode arrow keys, Alt-arrows (CSI 1;3) and Alt-letters."""
        if key_str[1] in ('[', 'O') and len(key_str) >= 3:
            if key_str[2] in _ARROWS and len(key_str) == 3:
                return KeyEvent(key_type=KeyType.SPECIAL, value=_ARROWS[key_str[2]],
                                raw=key_str, is_sequence=True)
            if key_str[2:5] == '1;3' and len(key_str) == 6 and key_str[5] in _ARROWS:
                return KeyEvent(key_type=KeyType.ALT, value=_ARROWS[key_str[5]],
                                raw=key_str, is_alt=True, is_sequence=True)
            return KeyEvent(key_type=KeyType.SPECIAL, value='unknown', raw=key_str, is_sequence=True)
        if len(key_str) == 2:
            if key_str[1] == '\x7f':
                return KeyEvent(key_type=KeyType.ALT, value='backspace', raw=key_str, is_alt=True)
            return KeyEvent(key_type=KeyType.ALT, value=key_str[1], raw=key_str, is_alt=True)
        return KeyEvent(key_type=KeyType.SPECIAL, value='unknown', raw=key_str, is_sequence=True)
