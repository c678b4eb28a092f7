"""Cursor movement over the document."""

from .context import EditorContext
from .coords import rendered_to_raw


def _char_at(ctx: EditorContext, cx: int, cy: int) -> str:
    """Character at a position; end of row reads as newline, past the end as NUL."""
    row = ctx.document.row_at(cy)
    if row is None:
        return '\0'
    if cx == len(row):
        return '\n'
    return row.raw[cx]


def _char_before(ctx: EditorContext) -> str:
    cx, cy = ctx.cursor.cx, ctx.cursor.cy
    if cx == 0 and cy == 0:
        return '\0'
    if cx == 0:
        cy -= 1
        cx = len(ctx.document.rows[cy])
    else:
        cx -= 1
    return _char_at(ctx, cx, cy)


def _at_end(ctx: EditorContext) -> bool:
    doc = ctx.document
    return ctx.cursor.cy == doc.last_index and ctx.cursor.cx == len(doc.rows[doc.last_index])


def _follow_target_column(ctx: EditorContext, rx: int):
    """Pick the raw column on the new row that best matches the visual column."""
    if len(ctx.document):
        cursor = ctx.cursor
        cursor.cx = rendered_to_raw(ctx.current_row, max(cursor.tx, rx))


def cursor_up(ctx: EditorContext):
    rx = ctx.cursor_rx()
    if ctx.cursor.cy != 0:
        ctx.cursor.cy -= 1
    _follow_target_column(ctx, rx)


def cursor_down(ctx: EditorContext):
    rx = ctx.cursor_rx()
    if ctx.cursor.cy < ctx.document.last_index:
        ctx.cursor.cy += 1
    _follow_target_column(ctx, rx)


def cursor_left(ctx: EditorContext):
    cursor = ctx.cursor
    if cursor.cx != 0:
        ctx.set_cursor(cursor.cx - 1, cursor.cy)
    elif cursor.cy > 0:
        ctx.set_cursor(len(ctx.document.rows[cursor.cy - 1]), cursor.cy - 1)


def cursor_right(ctx: EditorContext):
    cursor = ctx.cursor
    row = ctx.current_row
    if row is None:
        return
    if cursor.cx < len(row):
        ctx.set_cursor(cursor.cx + 1, cursor.cy)
    elif cursor.cy != ctx.document.last_index:
        ctx.set_cursor(0, cursor.cy + 1)


def forward_word(ctx: EditorContext):
    """Skip to the end of the next run of letters."""
    if not len(ctx.document):
        return
    while not _char_at(ctx, ctx.cursor.cx, ctx.cursor.cy).isalpha() and not _at_end(ctx):
        cursor_right(ctx)
    if not _at_end(ctx):
        while _char_at(ctx, ctx.cursor.cx, ctx.cursor.cy).isalpha():
            cursor_right(ctx)


def backward_word(ctx: EditorContext):
    """Skip back to the start of the previous run of letters."""
    if not len(ctx.document) or (ctx.cursor.cx == 0 and ctx.cursor.cy == 0):
        return
    while not (_char_before(ctx).isalpha() or _char_before(ctx) == '\0'):
        cursor_left(ctx)
    while _char_before(ctx).isalpha():
        cursor_left(ctx)


def line_begin(ctx: EditorContext):
    ctx.set_cursor(0, ctx.cursor.cy)


def line_end(ctx: EditorContext):
    row = ctx.current_row
    if row is not None:
        ctx.set_cursor(len(row), ctx.cursor.cy)


def file_top(ctx: EditorContext):
    rx = ctx.cursor_rx()
    ctx.cursor.cy = 0
    _follow_target_column(ctx, rx)


def file_bottom(ctx: EditorContext):
    rx = ctx.cursor_rx()
    ctx.cursor.cy = max(0, ctx.document.last_index)
    _follow_target_column(ctx, rx)


def page_up(ctx: EditorContext):
    """Jump to the top visible row, then move up one screen."""
    rx = ctx.cursor_rx()
    ctx.cursor.cy = min(ctx.viewport.row_offset, max(0, ctx.document.last_index))
    _follow_target_column(ctx, rx)
    for _ in range(ctx.viewport.rows):
        cursor_up(ctx)


def page_down(ctx: EditorContext):
    """Jump to the bottom visible row, then move down one screen."""
    rx = ctx.cursor_rx()
    ctx.cursor.cy = min(ctx.viewport.row_offset + ctx.viewport.rows - 1,
                        max(0, ctx.document.last_index))
    _follow_target_column(ctx, rx)
    for _ in range(ctx.viewport.rows):
        cursor_down(ctx)


def clamp_cursor(ctx: EditorContext):
    """Keep the cursor inside the document after any action."""
    doc = ctx.document
    cursor = ctx.cursor
    if cursor.cy > max(0, doc.last_index):
        cursor.cy = max(0, doc.last_index)
    row = ctx.current_row
    length = len(row) if row is not None else 0
    if cursor.cx > length:
        cursor.cx = length
