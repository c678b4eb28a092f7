"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import List, Optional
import sys
import select

from . import render
from .syntax import HIGHLIGHT_COLORS, Highlight


class TerminalError(RuntimeError):
    """The terminal cannot be used (not a tty, or no usable geometry)."""


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def check_environment(self):
        """Raise TerminalError unless stdin is a terminal with a usable size."""
        if not sys.stdin.isatty():
            raise TerminalError("stdin is not a terminal")
        try:
            width, height = int(self.term.width), int(self.term.height)
        except (TypeError, ValueError) as e:
            raise TerminalError(f"cannot query terminal size: {e}") from e
        if width <= 0 or height <= 0:
            raise TerminalError("cannot query terminal size")

    def setup(self):
        """Enter fullscreen mode and raw key input."""
        self.check_environment()
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            try:
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception as e:
                self.cleanup()
                raise TerminalError(f"cannot enter raw mode: {e}") from e

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
                self._curtsies_active = False
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def _color(self, tag: Optional[Highlight]) -> str:
        name = HIGHLIGHT_COLORS.get(tag) if tag is not None else None
        return getattr(self.term, name) if name else ''

    def compose(self, instructions: List[object]) -> str:
        """Translate render instructions into one output string."""
        term = self.term
        out = []
        color: Optional[Highlight] = None
        matching = False

        def attrs() -> str:
            # blessed has no "default foreground" code; reset and re-apply
            return term.normal + (term.on_blue if matching else '') + self._color(color)

        for ins in instructions:
            if isinstance(ins, render.HideCursor):
                out.append(term.hide_cursor)
            elif isinstance(ins, render.Home):
                out.append(term.home)
            elif isinstance(ins, render.Text):
                out.append(ins.text)
            elif isinstance(ins, render.SetColor):
                color = ins.tag
                out.append(attrs())
            elif isinstance(ins, render.ResetColor):
                color = None
                out.append(attrs())
            elif isinstance(ins, render.MatchStart):
                matching = True
                out.append(attrs())
            elif isinstance(ins, render.MatchEnd):
                matching = False
                out.append(attrs())
            elif isinstance(ins, render.ControlGlyph):
                out.append(term.normal + term.reverse + ins.symbol)
                out.append(attrs())
            elif isinstance(ins, render.EndLine):
                out.append(term.clear_eol)
                if not ins.last:
                    out.append('\r\n')
            elif isinstance(ins, render.StatusLine):
                style = term.bold_black_on_white if ins.insert_mode else term.bold_black_on_blue
                out.append('\r\n' + style + ins.text + term.normal)
            elif isinstance(ins, render.PromptLine):
                out.append('\r\n' + term.clear_eol + ins.prefix + ins.text)
            elif isinstance(ins, render.MessageLine):
                out.append('\r\n' + term.clear_eol)
                if ins.text:
                    if ins.error:
                        out.append(term.white_on_red + ins.text + term.normal)
                    else:
                        out.append(ins.text)
            elif isinstance(ins, render.DebugLine):
                out.append('\r\n' + ins.text + term.clear_eol)
            elif isinstance(ins, render.PlaceCursor):
                out.append(term.move_yx(ins.row, ins.col))
            elif isinstance(ins, render.ShowCursor):
                out.append(term.normal_cursor)
        return ''.join(out)

    def draw_frame(self, instructions: List[object]):
        """Write one full frame to the screen."""
        # Bytes that were not valid UTF-8 on load show as one replacement glyph each
        frame = self.compose(instructions).encode('utf-8', 'replace').decode('utf-8')
        print(frame, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key token as a string, or None.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))  # blocks
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
