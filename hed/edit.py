"""Structural edits on the document at the cursor."""

import logging

from .context import EditorContext, Mode, Position

logger = logging.getLogger(__name__)


class EditEngine:
    """Insert, delete, split, join, cut and paste operations on an editor context."""

    def __init__(self, ctx: EditorContext):
        self.ctx = ctx

    @property
    def doc(self):
        return self.ctx.document

    def _ensure_row(self):
        """Materialize a single empty row in an empty document."""
        if len(self.doc) == 0:
            self.doc.insert_row(0, "")

    def insert_char(self, ch: str):
        """Insert ``ch`` at the cursor; a newline splits the line without autoindent."""
        if ch == '\n':
            self.split_line(autoindent=False)
            return
        self._ensure_row()
        cursor = self.ctx.cursor
        self.doc.insert_text(cursor.cy, cursor.cx, ch)
        self.ctx.set_cursor(cursor.cx + 1, cursor.cy)

    def split_line(self, autoindent: bool = False):
        """Break the current row at the cursor and move to the start of the new row."""
        self._ensure_row()
        cursor = self.ctx.cursor
        if cursor.cx == 0:
            self.doc.insert_row(cursor.cy, "")
        else:
            tail = self.doc.truncate_row(cursor.cy, cursor.cx)
            self.doc.insert_row(cursor.cy + 1, tail)
        self.ctx.set_cursor(0, cursor.cy + 1)
        if autoindent:
            self._indent_to_previous()

    def _indent_to_previous(self):
        """Give the cursor row the indentation of the nearest non-blank row above."""
        cursor = self.ctx.cursor
        target = 0
        for y in range(cursor.cy - 1, -1, -1):
            if self.doc.rows[y].raw.strip():
                target = self.doc.get_indent(y)
                break
        current = self.doc.get_indent(cursor.cy)
        if target > current:
            self.doc.set_indent(cursor.cy, target)
            self.ctx.set_cursor(cursor.cx + target - current, cursor.cy)

    def delete_left(self):
        """Backspace: delete the character before the cursor or join with the row above."""
        cursor = self.ctx.cursor
        row = self.ctx.current_row
        if row is None or (cursor.cx == 0 and cursor.cy == 0):
            return
        if cursor.cx > 0:
            self.doc.delete_text(cursor.cy, cursor.cx - 1, 1)
            self.ctx.set_cursor(cursor.cx - 1, cursor.cy)
        else:
            y = cursor.cy
            self.ctx.set_cursor(len(self.doc.rows[y - 1]), y - 1)
            self.doc.append_text(y - 1, row.raw)
            self.doc.delete_row(y)

    def delete_right(self):
        """Delete the character under the cursor or pull the next row up at end of line."""
        cursor = self.ctx.cursor
        row = self.ctx.current_row
        if row is None:
            return
        if cursor.cx == len(row):
            if cursor.cy < self.doc.last_index:
                self.doc.append_text(cursor.cy, self.doc.rows[cursor.cy + 1].raw)
                self.doc.delete_row(cursor.cy + 1)
        else:
            self.doc.delete_text(cursor.cy, cursor.cx, 1)

    def set_mark(self):
        self.ctx.mark = Position(self.ctx.cursor.cx, self.ctx.cursor.cy)

    def cut_region(self):
        """Cut the text between the mark and the cursor into the clipboard.

        Returns the cut text, or None when mark and cursor coincide.
        """
        ctx = self.ctx
        doc = self.doc
        here = Position(ctx.cursor.cx, ctx.cursor.cy)
        mark = Position(ctx.mark.x, ctx.mark.y)
        if here == mark:
            return None
        start, end = (mark, here) if mark < here else (here, mark)
        if end.y > doc.last_index:
            logger.debug("Mark %s is outside the document; nothing cut", mark)
            return None

        parts = []
        last = doc.rows[doc.last_index]
        if start == Position(0, 0) and end.y == doc.last_index and end.x == len(last):
            while len(doc):
                parts.append(doc.delete_row(0))
        elif start.y == end.y:
            parts.append(doc.delete_text(start.y, start.x, end.x - start.x))
        else:
            start_deleted = start.x == 0
            if start_deleted:
                parts.append(doc.delete_row(start.y))
            else:
                parts.append(doc.truncate_row(start.y, start.x))
            next_y = start.y if start_deleted else start.y + 1
            for _ in range(start.y + 1, end.y):
                parts.append(doc.delete_row(next_y))
            if start_deleted:
                parts.append(doc.delete_text(next_y, 0, end.x))
            else:
                head = doc.rows[next_y].raw[:end.x]
                doc.append_text(start.y, doc.rows[next_y].raw[end.x:])
                doc.delete_row(next_y)
                parts.append(head)

        text = '\n'.join(parts)
        ctx.set_cursor(start.x, start.y)
        ctx.clipboard = text
        return text

    def paste_clipboard(self):
        """Replay the clipboard one character at a time."""
        for ch in self.ctx.clipboard:
            self.insert_char(ch)

    def open_line_below(self):
        """Start an indented empty line under the cursor and enter Insert mode."""
        self._ensure_row()
        cursor = self.ctx.cursor
        self.doc.insert_row(cursor.cy + 1, "")
        self.ctx.set_cursor(0, cursor.cy + 1)
        self._indent_to_previous()
        self.ctx.change_mode(Mode.INSERT)
