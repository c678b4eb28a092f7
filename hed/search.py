"""Literal substring search over rendered rows."""

from typing import Optional, Tuple

from .context import EditorContext, HighlightSpan
from .coords import rendered_to_raw


class SearchEngine:
    """Forward and backward search that marks the match and can move the cursor."""

    END_MESSAGE = "search reached end of document"
    START_MESSAGE = "search reached start of document"
    EMPTY_MESSAGE = "empty previous search"

    def __init__(self, ctx: EditorContext):
        self.ctx = ctx

    def _find_forward(self, query: str) -> Optional[Tuple[int, int]]:
        ctx = self.ctx
        rx = ctx.cursor_rx()
        rows = ctx.document.rows
        for y in range(ctx.cursor.cy, len(rows)):
            start = rx + 1 if y == ctx.cursor.cy else 0
            match = rows[y].rendered.find(query, start)
            if match != -1:
                return y, match
        return None

    def _find_backward(self, query: str) -> Optional[Tuple[int, int]]:
        ctx = self.ctx
        rx = ctx.cursor_rx()
        rows = ctx.document.rows
        for y in range(min(ctx.cursor.cy, len(rows) - 1), -1, -1):
            if y == ctx.cursor.cy:
                if ctx.cursor.cx == 0:
                    continue
                # Match must start at or before rx - 1
                match = rows[y].rendered.rfind(query, 0, rx - 1 + len(query))
            else:
                match = rows[y].rendered.rfind(query)
            if match != -1:
                return y, match
        return None

    def _apply(self, found: Optional[Tuple[int, int]], query: str,
               move_cursor: bool, failure: str) -> bool:
        ctx = self.ctx
        if found is None:
            ctx.set_message(failure, error=True)
            ctx.reset_highlight()
            return False
        y, match = found
        if move_cursor:
            ctx.set_cursor(rendered_to_raw(ctx.document.rows[y], match), y)
        ctx.highlight = HighlightSpan(y, match, y, match + len(query))
        ctx.viewport.scroll_to(match + len(query), y)
        return True

    def search_forward(self, query: str, move_cursor: bool = True) -> bool:
        """Find ``query`` after the cursor; returns True on a match."""
        if not query:
            self.ctx.reset_highlight()
            return False
        return self._apply(self._find_forward(query), query, move_cursor, self.END_MESSAGE)

    def search_backward(self, query: str, move_cursor: bool = True) -> bool:
        """Find ``query`` before the cursor; returns True on a match."""
        if not query:
            self.ctx.reset_highlight()
            return False
        return self._apply(self._find_backward(query), query, move_cursor, self.START_MESSAGE)

    def repeat_forward(self) -> bool:
        if not self.ctx.last_search:
            self.ctx.set_message(self.EMPTY_MESSAGE, error=True)
            return False
        return self.search_forward(self.ctx.last_search, True)

    def repeat_backward(self) -> bool:
        if not self.ctx.last_search:
            self.ctx.set_message(self.EMPTY_MESSAGE, error=True)
            return False
        return self.search_backward(self.ctx.last_search, True)
