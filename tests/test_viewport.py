"""Tests for scroll offsets."""

from hed.viewport import Viewport


def test_scrolls_down_keeping_margin():
    viewport = Viewport(rows=20, cols=80)
    viewport.scroll_to(0, 30)
    assert viewport.row_offset == 16


def test_scrolls_up_to_cursor_row():
    viewport = Viewport(rows=20, cols=80)
    viewport.row_offset = 10
    viewport.scroll_to(0, 5)
    assert viewport.row_offset == 5


def test_no_scroll_inside_window():
    viewport = Viewport(rows=20, cols=80)
    viewport.scroll_to(10, 14)
    assert (viewport.row_offset, viewport.col_offset) == (0, 0)


def test_horizontal_scroll():
    viewport = Viewport(rows=20, cols=80)
    viewport.scroll_to(100, 0)
    assert viewport.col_offset == 26
    viewport.scroll_to(3, 0)
    assert viewport.col_offset == 3


def test_tiny_window_keeps_cursor_visible():
    viewport = Viewport(rows=3, cols=4)
    viewport.scroll_to(9, 10)
    assert viewport.row_offset == 10
    assert viewport.col_offset == 9


def test_command_line_scroll():
    viewport = Viewport(rows=20, cols=10)
    viewport.scroll_cmdline(12)
    assert viewport.cmd_offset == 4
    viewport.scroll_cmdline(2)
    assert viewport.cmd_offset == 2


def test_resize_never_goes_below_one():
    viewport = Viewport()
    viewport.resize(-1, 0)
    assert (viewport.rows, viewport.cols) == (1, 1)
