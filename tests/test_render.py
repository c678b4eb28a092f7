"""Tests for the frame instruction stream."""

from hed import render
from hed.buffer import Document
from hed.constants import EditorConstants
from hed.context import EditorContext, HighlightSpan, Mode
from hed.syntax import C_SYNTAX, Highlight
from hed.viewport import Viewport


def make_ctx(lines, rows=5, cols=30, path=None, syntax=None):
    ctx = EditorContext(document=Document(lines, path=path, syntax=syntax),
                        viewport=Viewport(rows=rows, cols=cols))
    return ctx


def test_empty_document_shows_welcome_and_tildes():
    ctx = make_ctx([], rows=6, cols=80)
    lines = render.frame_text(render.render_frame(ctx))
    assert len(lines) == 8
    assert EditorConstants.WELCOME_MESSAGE in lines[2]
    assert lines[2].startswith("~ ")
    for y in (0, 1, 3, 4, 5):
        assert lines[y] == "~"


def test_rows_past_end_are_tildes():
    ctx = make_ctx(["one", "two"], rows=4)
    lines = render.frame_text(render.render_frame(ctx))
    assert lines[:4] == ["one", "two", "~", "~"]


def test_tabs_are_expanded_and_cursor_uses_rendered_column():
    ctx = make_ctx(["\tab"])
    ctx.set_cursor(2, 0)
    frame = render.render_frame(ctx)
    assert render.frame_text(frame)[0] == "    ab"
    assert ctx.cursor.rx == 5
    assert render.PlaceCursor(0, 5) in frame


def test_status_line_layout():
    ctx = make_ctx(["a", "b"], path="main.c", syntax=C_SYNTAX)
    lines = render.frame_text(render.render_frame(ctx))
    assert lines[5] == "[-N] main.c" + " " * 14 + "c 1/2"


def test_status_line_dirty_insert_and_no_name():
    ctx = make_ctx(["a"])
    ctx.document.dirty = True
    ctx.mode = Mode.INSERT
    frame = render.render_frame(ctx)
    status = [ins for ins in frame if isinstance(ins, render.StatusLine)][0]
    assert status.text.startswith("[*I] [No name]")
    assert status.text.endswith("none 1/1")
    assert status.insert_mode


def test_status_line_truncates_path():
    ctx = make_ctx(["a"], path="a" * 40, cols=80)
    lines = render.frame_text(render.render_frame(ctx))
    assert lines[5].startswith("[-N] " + "a" * 20 + " ")


def test_syntax_colors_are_emitted():
    ctx = make_ctx(["int x"], syntax=C_SYNTAX)
    frame = render.render_frame(ctx)
    assert render.SetColor(Highlight.TYPE) in frame
    assert render.ResetColor() in frame


def test_control_character_glyph():
    ctx = make_ctx(["a\x01b\x7f"])
    frame = render.render_frame(ctx)
    assert render.frame_text(frame)[0] == "aAb?"
    glyphs = [ins for ins in frame if isinstance(ins, render.ControlGlyph)]
    assert [g.symbol for g in glyphs] == ["A", "?"]


def test_search_match_markers():
    ctx = make_ctx(["foo bar"])
    ctx.highlight = HighlightSpan(0, 4, 0, 7)
    frame = render.render_frame(ctx)
    start = frame.index(render.MatchStart())
    end = frame.index(render.MatchEnd())
    texts = [ins.text for ins in frame[start:end] if isinstance(ins, render.Text)]
    assert "".join(texts) == "bar"


def test_horizontal_offset_clips_rows():
    ctx = make_ctx(["0123456789"], cols=4)
    ctx.viewport.col_offset = 3
    ctx.set_cursor(5, 0)
    frame = render.render_frame(ctx)
    assert render.frame_text(frame)[0] == "3456"
    assert render.PlaceCursor(0, 2) in frame


def test_message_line():
    ctx = make_ctx(["a"])
    ctx.set_message("no filename")
    frame = render.render_frame(ctx)
    assert render.MessageLine("no filename", error=False) in frame


def test_prompt_line_and_cursor():
    ctx = make_ctx(["a"])
    ctx.change_mode(Mode.COMMAND)
    ctx.cmdline = "quit"
    ctx.cmdx = 2
    frame = render.render_frame(ctx)
    assert render.PromptLine(":", "quit") in frame
    assert render.PlaceCursor(6, 3) in frame
    assert render.frame_text(frame)[6] == ":quit"


def test_search_prompt_prefix():
    ctx = make_ctx(["a"])
    ctx.change_mode(Mode.SEARCH)
    ctx.cmdline = "foo"
    assert render.PromptLine("/", "foo") in render.render_frame(ctx)


def test_debug_line():
    ctx = make_ctx(["a"])
    lines = render.frame_text(render.render_frame(ctx, show_debug=True))
    assert len(lines) == 8
    assert lines[7].startswith("cmdx: 0")


def test_render_does_not_touch_document():
    ctx = make_ctx(["abc"])
    render.render_frame(ctx)
    assert not ctx.document.dirty
    assert ctx.document.lines() == ["abc"]
