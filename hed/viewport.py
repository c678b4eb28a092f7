"""Scroll offsets that keep the cursor inside the visible window."""

from .constants import EditorConstants


class Viewport:
    """Visible window over the document and over the command line."""

    def __init__(self, rows: int = 20, cols: int = 80):
        self.rows = rows
        self.cols = cols
        self.row_offset = 0
        self.col_offset = 0
        self.cmd_offset = 0

    def resize(self, rows: int, cols: int) -> None:
        self.rows = max(1, rows)
        self.cols = max(1, cols)

    @property
    def row_margin(self) -> int:
        return max(1, self.rows - EditorConstants.SCROLL_MARGIN)

    @property
    def col_margin(self) -> int:
        return max(1, self.cols - EditorConstants.SCROLL_MARGIN)

    def scroll_to(self, x: int, y: int) -> None:
        """Move the offsets so rendered column ``x`` of row ``y`` is visible."""
        if y < self.row_offset:
            self.row_offset = y
        if y >= self.row_offset + self.row_margin:
            self.row_offset = y - self.row_margin + 1
        if x < self.col_offset:
            self.col_offset = x
        if x >= self.col_offset + self.col_margin:
            self.col_offset = x - self.col_margin + 1

    def scroll_cmdline(self, cmdx: int) -> None:
        """Keep the command-line cursor visible after the one-character prompt."""
        width = max(1, self.cols - 1)
        if cmdx < self.cmd_offset:
            self.cmd_offset = cmdx
        if cmdx >= self.cmd_offset + width:
            self.cmd_offset = cmdx - width + 1
