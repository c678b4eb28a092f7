"""Tests for tab expansion and the row's derived fields."""

from hed.buffer import Document, Row
from hed.context import EditorContext
from hed.coords import expand_tabs
from hed.edit import EditEngine
from hed.syntax import C_SYNTAX, Highlight


def test_tab_at_line_start_fills_to_tab_stop():
    assert expand_tabs("\tx") == "    x"


def test_tab_after_text_fills_to_next_stop():
    assert expand_tabs("ab\tc") == "ab  c"
    assert expand_tabs("abc\tc") == "abc c"


def test_tab_on_stop_emits_full_width():
    """A tab at a multiple of the tab stop still emits a full four spaces."""
    assert expand_tabs("abcd\t") == "abcd    "


def test_no_tabs_is_unchanged():
    assert expand_tabs("plain text") == "plain text"
    assert expand_tabs("") == ""


def test_row_rendered_and_tags_stay_in_step():
    row = Row("\tint x;", C_SYNTAX)
    assert row.rendered == "    int x;"
    assert len(row.tags) == len(row.rendered)

    row.set_raw("a\tb", C_SYNTAX)
    assert row.rendered == "a   b"
    assert len(row.tags) == len(row.rendered)


def test_document_edits_refresh_rendered_form():
    doc = Document(["x"], syntax=C_SYNTAX)
    doc.insert_text(0, 0, "\t")
    row = doc.rows[0]
    assert row.rendered == "    x"
    assert len(row.tags) == 5

    doc.insert_text(0, 1, "int ")
    assert row.raw == "\tint x"
    assert row.tags[4:7] == [Highlight.TYPE] * 3


def test_set_syntax_retags_rows():
    doc = Document(["int x;"])
    assert doc.rows[0].tags == [Highlight.NORMAL] * 6
    doc.set_syntax(C_SYNTAX)
    assert doc.rows[0].tags[:3] == [Highlight.TYPE] * 3


def test_tags_follow_rendered_form_through_edits():
    ctx = EditorContext(document=Document(["int x = 10;"], syntax=C_SYNTAX))
    ctx.set_cursor(3, 0)
    engine = EditEngine(ctx)
    row = ctx.document.rows[0]

    steps = [
        lambda: engine.insert_char('\t'),
        lambda: engine.insert_char('\t'),
        engine.delete_left,
        engine.delete_right,
        lambda: engine.insert_char('a'),
        lambda: engine.insert_char('\t'),
        engine.delete_right,
        engine.delete_left,
        engine.delete_left,
    ]
    for step in steps:
        step()
        assert len(row.tags) == len(row.rendered)
        assert row.rendered == expand_tabs(row.raw)

    assert row.raw == "int\t = 10;"
