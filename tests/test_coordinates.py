"""Tests for mapping between raw and rendered columns."""

from hed.buffer import Row
from hed.coords import raw_to_rendered, rendered_to_raw


def test_raw_to_rendered_without_tabs():
    row = Row("hello")
    assert raw_to_rendered(row, 0) == 0
    assert raw_to_rendered(row, 3) == 3
    assert raw_to_rendered(row, 5) == 5


def test_raw_to_rendered_with_tabs():
    row = Row("\tab\tc")
    assert raw_to_rendered(row, 1) == 4
    assert raw_to_rendered(row, 3) == 6
    assert raw_to_rendered(row, 4) == 8


def test_rendered_column_inside_tab_maps_to_the_tab():
    row = Row("\tab")
    assert rendered_to_raw(row, 0) == 0
    assert rendered_to_raw(row, 2) == 0
    assert rendered_to_raw(row, 3) == 0
    assert rendered_to_raw(row, 4) == 1


def test_rendered_column_past_end_maps_to_length():
    row = Row("\tab")
    assert rendered_to_raw(row, 6) == 3
    assert rendered_to_raw(row, 100) == 3


def test_raw_column_survives_a_round_trip():
    row = Row("a\tbc\t\td")
    for cx in range(len(row) + 1):
        assert rendered_to_raw(row, raw_to_rendered(row, cx)) == cx


def test_missing_row_maps_to_zero():
    assert raw_to_rendered(None, 5) == 0
    assert rendered_to_raw(None, 5) == 0
