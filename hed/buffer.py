"""Row store: the document's rows with their rendered text and highlight tags."""

import string
from typing import List, Optional

from .coords import expand_tabs
from .syntax import Highlight, SyntaxDescriptor, highlight_row


class Row:
    """One line of text.

    ``rendered`` and ``tags`` are derived from ``raw`` and are rebuilt
    together every time the raw text is replaced.
    """

    def __init__(self, raw: str = "", syntax: Optional[SyntaxDescriptor] = None):
        self._raw = raw
        self.rendered = ""
        self.tags: List[Highlight] = []
        self.update(syntax)

    @property
    def raw(self) -> str:
        return self._raw

    def __len__(self) -> int:
        return len(self._raw)

    def __repr__(self) -> str:
        return f"Row({self._raw!r})"

    def set_raw(self, raw: str, syntax: Optional[SyntaxDescriptor]) -> None:
        self._raw = raw
        self.update(syntax)

    def update(self, syntax: Optional[SyntaxDescriptor]) -> None:
        """Regenerate the rendered text and its tags from ``raw``."""
        self.rendered = expand_tabs(self._raw)
        self.tags = highlight_row(self.rendered, syntax)


class Document:
    """Ordered rows plus the dirty flag, file path and active syntax."""

    def __init__(self, lines: Optional[List[str]] = None, path: Optional[str] = None,
                 syntax: Optional[SyntaxDescriptor] = None):
        self.path = path
        self.syntax = syntax
        self.rows: List[Row] = [Row(line, syntax) for line in (lines or [])]
        self.dirty = False

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def last_index(self) -> int:
        return len(self.rows) - 1

    def lines(self) -> List[str]:
        return [row.raw for row in self.rows]

    def row_at(self, at: int) -> Optional[Row]:
        if at < 0 or at >= len(self.rows):
            return None
        return self.rows[at]

    def insert_row(self, at: int, text: str = "") -> Optional[Row]:
        """Insert a row before index ``at``; returns None if ``at`` is out of range."""
        if at < 0 or at > len(self.rows):
            return None
        row = Row(text, self.syntax)
        self.rows.insert(at, row)
        self.dirty = True
        return row

    def delete_row(self, at: int) -> str:
        """Remove the row at ``at`` and return its raw text."""
        if at < 0 or at >= len(self.rows):
            return ""
        row = self.rows.pop(at)
        self.dirty = True
        return row.raw

    def _replace(self, y: int, raw: str) -> None:
        self.rows[y].set_raw(raw, self.syntax)
        self.dirty = True

    def insert_text(self, y: int, at: int, text: str) -> None:
        """Insert ``text`` into row ``y``; an out-of-range column appends."""
        raw = self.rows[y].raw
        if at < 0 or at > len(raw):
            at = len(raw)
        self._replace(y, raw[:at] + text + raw[at:])

    def delete_text(self, y: int, at: int, length: int) -> str:
        """Remove ``length`` characters of row ``y`` starting at ``at`` and return them."""
        raw = self.rows[y].raw
        if at < 0 or length <= 0 or at + length > len(raw):
            return ""
        removed = raw[at:at + length]
        self._replace(y, raw[:at] + raw[at + length:])
        return removed

    def append_text(self, y: int, text: str) -> None:
        self._replace(y, self.rows[y].raw + text)

    def truncate_row(self, y: int, at: int) -> str:
        """Cut row ``y`` at column ``at`` and return the removed tail."""
        raw = self.rows[y].raw
        self._replace(y, raw[:at])
        return raw[at:]

    def get_indent(self, y: int) -> int:
        """Number of leading tab characters of row ``y``."""
        raw = self.rows[y].raw
        return len(raw) - len(raw.lstrip('\t'))

    def set_indent(self, y: int, indent: int) -> None:
        raw = self.rows[y].raw
        self._replace(y, '\t' * indent + raw.lstrip('\t'))

    def trim_trailing_whitespace(self) -> None:
        for y, row in enumerate(self.rows):
            trimmed = row.raw.rstrip(string.whitespace)
            if trimmed != row.raw:
                self._replace(y, trimmed)

    def set_syntax(self, syntax: Optional[SyntaxDescriptor]) -> None:
        """Switch highlighting and re-tag every row."""
        self.syntax = syntax
        for row in self.rows:
            row.update(syntax)
