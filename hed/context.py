"""Editor state shared by the input state machine and the renderer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .buffer import Document, Row
from .constants import EditorConstants
from .coords import raw_to_rendered
from .viewport import Viewport


class Mode(Enum):
    """Input modes of the editor."""
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"
    SEARCH = "search"

    @property
    def marker(self) -> str:
        """Single-letter marker shown in the status line."""
        return self.value[0].upper()


@dataclass
class Position:
    x: int = 0
    y: int = 0

    def __lt__(self, other):
        if self.y != other.y:
            return self.y < other.y
        return self.x < other.x


@dataclass
class Cursor:
    cx: int = 0
    cy: int = 0
    rx: int = 0  # rendered column, refreshed before every frame
    tx: int = 0  # rendered column to aim for on vertical moves


@dataclass
class HighlightSpan:
    """Rendered-coordinate range of the current search match."""
    start_y: int = 0
    start_x: int = 0
    end_y: int = 0
    end_x: int = 0

    def is_empty(self) -> bool:
        return self.start_y == self.end_y and self.start_x == self.end_x


@dataclass
class EditorContext:
    """All mutable editor state, owned by the editor and passed explicitly."""
    document: Document = field(default_factory=Document)
    cursor: Cursor = field(default_factory=Cursor)
    mark: Position = field(default_factory=Position)
    highlight: HighlightSpan = field(default_factory=HighlightSpan)
    viewport: Viewport = field(default_factory=Viewport)
    mode: Mode = Mode.NORMAL
    clipboard: str = ""
    cmdline: str = ""
    cmdx: int = 0
    message: str = ""
    message_is_error: bool = False
    quit_times: int = EditorConstants.NUM_FORCE_QUIT_PRESS
    last_search: str = ""

    @property
    def current_row(self) -> Optional[Row]:
        return self.document.row_at(self.cursor.cy)

    def set_cursor(self, cx: int, cy: int) -> None:
        """Place the cursor and remember its rendered column as the vertical target."""
        self.cursor.cx = cx
        self.cursor.cy = cy
        self.cursor.tx = raw_to_rendered(self.document.row_at(cy), cx)

    def cursor_rx(self) -> int:
        return raw_to_rendered(self.current_row, self.cursor.cx)

    def in_prompt(self) -> bool:
        """True while the bottom line is an input line (Command or Search)."""
        return self.mode in (Mode.COMMAND, Mode.SEARCH)

    def change_mode(self, mode: Mode) -> None:
        """Switch modes; the command-line buffer and any message are cleared."""
        self.mode = mode
        self.cmdline = ""
        self.cmdx = 0
        self.viewport.cmd_offset = 0
        self.message = ""
        self.message_is_error = False

    def set_message(self, text: str, error: bool = False) -> None:
        """Show a transient status message; ignored while typing a command or search."""
        if self.in_prompt():
            return
        self.message = text
        self.message_is_error = error

    def reset_highlight(self) -> None:
        self.highlight = HighlightSpan()
