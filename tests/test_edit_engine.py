"""Tests for character-level edits, line splits and joins."""

from hed.buffer import Document
from hed.context import EditorContext, Mode
from hed.edit import EditEngine


def make_engine(lines, cx=0, cy=0):
    ctx = EditorContext(document=Document(lines))
    ctx.set_cursor(cx, cy)
    return ctx, EditEngine(ctx)


def test_insert_into_empty_document_creates_row():
    ctx, engine = make_engine([])
    engine.insert_char('a')
    assert ctx.document.lines() == ["a"]
    assert ctx.cursor.cx == 1
    assert ctx.document.dirty


def test_insert_in_middle_of_row():
    ctx, engine = make_engine(["ac"], cx=1)
    engine.insert_char('b')
    assert ctx.document.lines() == ["abc"]
    assert (ctx.cursor.cx, ctx.cursor.cy) == (2, 0)


def test_insert_newline_character_splits():
    ctx, engine = make_engine(["abcd"], cx=2)
    engine.insert_char('\n')
    assert ctx.document.lines() == ["ab", "cd"]
    assert (ctx.cursor.cx, ctx.cursor.cy) == (0, 1)


def test_split_at_line_start_inserts_row_above():
    ctx, engine = make_engine(["abc"])
    engine.split_line()
    assert ctx.document.lines() == ["", "abc"]
    assert (ctx.cursor.cx, ctx.cursor.cy) == (0, 1)


def test_split_with_autoindent_copies_tabs():
    ctx, engine = make_engine(["\t\tfoo"], cx=5)
    engine.split_line(autoindent=True)
    assert ctx.document.lines() == ["\t\tfoo", "\t\t"]
    assert (ctx.cursor.cx, ctx.cursor.cy) == (2, 1)


def test_autoindent_skips_blank_rows():
    ctx, engine = make_engine(["\tfoo", "   "], cx=3, cy=1)
    engine.split_line(autoindent=True)
    assert ctx.document.lines() == ["\tfoo", "   ", "\t"]
    assert ctx.cursor.cx == 1


def test_autoindent_never_removes_indentation():
    ctx, engine = make_engine(["x", "\t\tbar"], cx=2, cy=1)
    engine.split_line(autoindent=True)
    assert ctx.document.lines() == ["x", "\t\t", "bar"]
    assert ctx.cursor.cx == 0


def test_backspace_at_document_start_does_nothing():
    ctx, engine = make_engine(["abc"])
    engine.delete_left()
    assert ctx.document.lines() == ["abc"]
    assert not ctx.document.dirty


def test_backspace_deletes_previous_character():
    ctx, engine = make_engine(["abc"], cx=2)
    engine.delete_left()
    assert ctx.document.lines() == ["ac"]
    assert ctx.cursor.cx == 1


def test_backspace_at_line_start_joins_rows():
    ctx, engine = make_engine(["ab", "cd"], cx=0, cy=1)
    engine.delete_left()
    assert ctx.document.lines() == ["abcd"]
    assert (ctx.cursor.cx, ctx.cursor.cy) == (2, 0)


def test_deleting_last_character_keeps_the_row():
    ctx, engine = make_engine(["a"], cx=1)
    engine.delete_left()
    assert ctx.document.lines() == [""]
    assert len(ctx.document) == 1


def test_delete_right_removes_char_under_cursor():
    ctx, engine = make_engine(["abc"], cx=1)
    engine.delete_right()
    assert ctx.document.lines() == ["ac"]
    assert ctx.cursor.cx == 1


def test_delete_right_at_line_end_pulls_next_row_up():
    ctx, engine = make_engine(["ab", "cd"], cx=2)
    engine.delete_right()
    assert ctx.document.lines() == ["abcd"]


def test_delete_right_at_document_end_does_nothing():
    ctx, engine = make_engine(["ab"], cx=2)
    engine.delete_right()
    assert ctx.document.lines() == ["ab"]
    assert not ctx.document.dirty


def test_open_line_below_indents_and_enters_insert_mode():
    ctx, engine = make_engine(["\tif x:", "\t\ty"], cx=2)
    engine.open_line_below()
    assert ctx.document.lines() == ["\tif x:", "\t", "\t\ty"]
    assert (ctx.cursor.cx, ctx.cursor.cy) == (1, 1)
    assert ctx.mode == Mode.INSERT


def test_open_line_below_in_empty_document():
    ctx, engine = make_engine([])
    engine.open_line_below()
    assert ctx.document.lines() == ["", ""]
    assert ctx.cursor.cy == 1
