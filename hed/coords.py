"""Conversions between raw and rendered columns of a row."""

from typing import Optional, TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .buffer import Row


TAB_STOP = EditorConstants.TAB_STOP


def _advance(width: int, ch: str) -> int:
    """Return the rendered width after drawing ``ch`` at column ``width``."""
    if ch == '\t':
        width += (TAB_STOP - 1) - (width % TAB_STOP)
    return width + 1


def expand_tabs(raw: str) -> str:
    """Return the rendered form of ``raw``: tabs become spaces up to the next tab stop."""
    out = []
    width = 0
    for ch in raw:
        if ch == '\t':
            out.append(' ')
            width += 1
            while width % TAB_STOP != 0:
                out.append(' ')
                width += 1
        else:
            out.append(ch)
            width += 1
    return ''.join(out)


def raw_to_rendered(row: Optional['Row'], cx: int) -> int:
    """Rendered column of raw column ``cx``."""
    if row is None:
        return 0
    rx = 0
    for ch in row.raw[:cx]:
        rx = _advance(rx, ch)
    return rx


def rendered_to_raw(row: Optional['Row'], rx: int) -> int:
    """Raw index of the character occupying rendered column ``rx``.

    Walks the row until the running width exceeds ``rx``; a column past the
    end of the row maps to the raw length.
    """
    if row is None:
        return 0
    width = 0
    for cx, ch in enumerate(row.raw):
        width = _advance(width, ch)
        if width > rx:
            return cx
    return len(row.raw)
