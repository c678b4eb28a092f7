"""Turn editor state into an ordered list of display instructions.

The renderer knows nothing about terminal escape codes; it produces
instruction objects that ``TerminalInterface.draw_frame`` translates into
blessed sequences. Apart from refreshing the cursor's rendered column it
does not change editor state.
"""

from dataclasses import dataclass
from typing import List, Optional

from .buffer import Row
from .constants import EditorConstants
from .context import EditorContext, Mode
from .syntax import Highlight


@dataclass(frozen=True)
class HideCursor:
    pass


@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class SetColor:
    tag: Highlight


@dataclass(frozen=True)
class ResetColor:
    pass


@dataclass(frozen=True)
class MatchStart:
    pass


@dataclass(frozen=True)
class MatchEnd:
    pass


@dataclass(frozen=True)
class ControlGlyph:
    """A control character drawn as an inverse-video caret letter."""
    symbol: str
    restore: Optional[Highlight] = None


@dataclass(frozen=True)
class EndLine:
    last: bool = False


@dataclass(frozen=True)
class StatusLine:
    text: str
    insert_mode: bool = False


@dataclass(frozen=True)
class PromptLine:
    prefix: str
    text: str


@dataclass(frozen=True)
class MessageLine:
    text: str
    error: bool = False


@dataclass(frozen=True)
class DebugLine:
    text: str


@dataclass(frozen=True)
class PlaceCursor:
    row: int
    col: int


@dataclass(frozen=True)
class ShowCursor:
    pass


def control_symbol(ch: str) -> str:
    """Caret letter for a control character: NUL..^Z map to @..Z, anything else to '?'."""
    code = ord(ch)
    return chr(ord('@') + code) if code <= 26 else '?'


def _is_control(ch: str) -> bool:
    code = ord(ch)
    return code < 32 or code == 127


def _welcome_line(cols: int) -> str:
    welcome = EditorConstants.WELCOME_MESSAGE[:cols]
    padding = (cols - len(welcome)) // 2
    if padding:
        return "~" + " " * (padding - 1) + welcome
    return welcome


def _draw_row(out: list, ctx: EditorContext, filerow: int, row: Row):
    viewport = ctx.viewport
    span = ctx.highlight
    coloff = viewport.col_offset
    length = max(0, min(len(row.rendered) - coloff, viewport.cols))
    current: Optional[Highlight] = None

    # Runs one past the last character so a match ending at the edge closes
    for i in range(length + 1):
        filei = i + coloff
        if not span.is_empty():
            if filerow == span.start_y and filei == span.start_x:
                out.append(MatchStart())
            if filerow == span.end_y and filei == span.end_x:
                out.append(MatchEnd())
        if i == length:
            break

        ch = row.rendered[filei]
        tag = row.tags[filei]
        if _is_control(ch):
            out.append(ControlGlyph(control_symbol(ch), restore=current))
        elif tag == Highlight.NORMAL:
            if current is not None:
                out.append(ResetColor())
                current = None
            out.append(Text(ch))
        else:
            if tag != current:
                current = tag
                out.append(SetColor(tag))
            out.append(Text(ch))
    out.append(ResetColor())


def _status_text(ctx: EditorContext) -> str:
    doc = ctx.document
    cols = ctx.viewport.cols
    path = doc.path or EditorConstants.NO_NAME
    left = "[{}{}] {}".format(
        '*' if doc.dirty else '-',
        ctx.mode.marker,
        path[:EditorConstants.STATUS_PATH_WIDTH])[:cols]
    right = "{} {}/{}".format(
        doc.syntax.filetype if doc.syntax else EditorConstants.NO_FILETYPE,
        ctx.cursor.cy + 1,
        len(doc))
    if len(left) + len(right) <= cols:
        return left + " " * (cols - len(left) - len(right)) + right
    return left.ljust(cols)


def _debug_text(ctx: EditorContext) -> str:
    cursor = ctx.cursor
    return (
        f"cmdx: {ctx.cmdx}, cmdoff: {ctx.viewport.cmd_offset}, len(cmd): {len(ctx.cmdline)}, "
        f"rows: {len(ctx.document)}, cx: {cursor.cx}, cy: {cursor.cy}, "
        f"rx: {cursor.rx}, tx: {cursor.tx}"
    )[:ctx.viewport.cols]


def render_frame(ctx: EditorContext, show_debug: bool = False) -> List[object]:
    """Build the instruction stream for one full screen refresh."""
    ctx.cursor.rx = ctx.cursor_rx()
    viewport = ctx.viewport
    doc = ctx.document
    out: List[object] = [HideCursor(), Home()]

    for y in range(viewport.rows):
        filerow = y + viewport.row_offset
        row = doc.row_at(filerow)
        if row is None:
            if len(doc) == 0 and y == viewport.rows // 3:
                out.append(Text(_welcome_line(viewport.cols)))
            else:
                out.append(Text("~"))
        else:
            _draw_row(out, ctx, filerow, row)
        out.append(EndLine(last=y == viewport.rows - 1))

    out.append(StatusLine(_status_text(ctx), insert_mode=ctx.mode == Mode.INSERT))

    if ctx.in_prompt():
        prefix = ":" if ctx.mode == Mode.COMMAND else "/"
        start = viewport.cmd_offset
        out.append(PromptLine(prefix, ctx.cmdline[start:start + viewport.cols - 1]))
    else:
        out.append(MessageLine(ctx.message[:viewport.cols], error=ctx.message_is_error))

    if show_debug:
        out.append(DebugLine(_debug_text(ctx)))

    if ctx.in_prompt():
        out.append(PlaceCursor(viewport.rows + 1, ctx.cmdx - viewport.cmd_offset + 1))
    else:
        out.append(PlaceCursor(ctx.cursor.cy - viewport.row_offset,
                               ctx.cursor.rx - viewport.col_offset))
    out.append(ShowCursor())
    return out


def frame_text(instructions: List[object]) -> List[str]:
    """Plain text of each screen line in a frame, without colors."""
    lines = [""]
    for ins in instructions:
        if isinstance(ins, Text):
            lines[-1] += ins.text
        elif isinstance(ins, ControlGlyph):
            lines[-1] += ins.symbol
        elif isinstance(ins, EndLine):
            lines.append("")
        elif isinstance(ins, StatusLine):
            lines[-1] = ins.text
            lines.append("")
        elif isinstance(ins, PromptLine):
            lines[-1] = ins.prefix + ins.text
            lines.append("")
        elif isinstance(ins, (MessageLine, DebugLine)):
            lines[-1] = ins.text
            lines.append("")
    return lines[:-1]
