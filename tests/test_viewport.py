"""Test scroll offset and visible slice computation."""

import pytest
from refitui.model import Document, CursorPosition
from refitui.view import (
    Viewport,
    body_height,
    cell_width,
    fit_to_width,
    has_chrome,
    reconcile,
    screen_cursor,
    visible_rows,
)


def numbered_document(count):
    return Document([f"Line {i}" for i in range(count)])


def test_reconcile_scrolls_down_to_cursor():
    """Cursor at row 15 in a 10-row view from top 0 gives top 6."""
    assert reconcile(15, 10, 100, 0) == 6


def test_reconcile_scrolls_up_to_cursor():
    assert reconcile(3, 10, 100, 8) == 3


def test_reconcile_unchanged_when_visible():
    assert reconcile(5, 10, 100, 0) == 0
    assert reconcile(9, 10, 100, 0) == 0
    assert reconcile(12, 10, 100, 4) == 4


def test_reconcile_boundaries():
    # Last visible row keeps the top; one past it scrolls by one
    assert reconcile(9, 10, 100, 0) == 0
    assert reconcile(10, 10, 100, 0) == 1


@pytest.mark.parametrize("cursor_row,height,line_count,top", [
    (15, 10, 100, 0),
    (0, 5, 3, 2),
    (50, 7, 60, 10),
    (4, 1, 10, 0),
])
def test_reconcile_is_idempotent(cursor_row, height, line_count, top):
    first = reconcile(cursor_row, height, line_count, top)
    assert reconcile(cursor_row, height, line_count, first) == first


def test_reconcile_clamps_top_to_document():
    """A stale top past the end of a shrunken document is pulled back."""
    assert reconcile(2, 10, 3, 5) == 0
    assert reconcile(18, 10, 20, 15) == 10


def test_reconcile_short_document_never_scrolls():
    assert reconcile(2, 10, 3, 0) == 0


def test_visible_rows_full_window():
    doc = numbered_document(20)
    assert visible_rows(doc, 5, 3) == ["Line 5", "Line 6", "Line 7"]


def test_visible_rows_near_end_returns_fewer():
    doc = numbered_document(4)
    assert visible_rows(doc, 2, 10) == ["Line 2", "Line 3"]


def test_visible_rows_zero_height():
    assert visible_rows(numbered_document(4), 0, 0) == []


def test_screen_cursor_translates_row():
    assert screen_cursor(CursorPosition(12, 3), 10, 80) == (2, 3)


def test_screen_cursor_clamps_to_width():
    """Long lines are truncated, not wrapped: the cursor is pinned to the last column.

    Deliberately preserved behavior; change this test if wrapping is wanted.
    """
    assert screen_cursor(CursorPosition(0, 120), 0, 80) == (0, 79)
    assert screen_cursor(CursorPosition(0, 79), 0, 80) == (0, 79)


def test_screen_cursor_counts_wide_characters():
    line = "日本語abc"
    assert screen_cursor(CursorPosition(0, 2), 0, 80, line=line) == (0, 4)
    assert screen_cursor(CursorPosition(0, 4), 0, 80, line=line) == (0, 7)
    assert screen_cursor(CursorPosition(0, 6), 0, 5, line=line) == (0, 4)


def test_frame_places_cursor_after_wide_text():
    doc = Document(["漢字 text"])
    doc.cursor_position = CursorPosition(0, 3)
    frame = Viewport().frame(doc, 80, 10)
    assert (frame.cursor_y, frame.cursor_x) == (0, 5)


def test_cell_width_and_fit():
    assert cell_width("abc") == 3
    assert cell_width("日本") == 4
    assert cell_width("a\tb") == 3
    assert fit_to_width("日本語", 5) == "日本 "
    assert fit_to_width("ab", 0) == ""


def test_body_height_reserves_bars():
    assert body_height(24) == 22
    assert body_height(3) == 1
    assert has_chrome(3)


def test_body_height_tiny_terminal():
    assert body_height(2) == 2
    assert body_height(1) == 1
    assert body_height(0) == 1
    assert not has_chrome(2)


def test_viewport_frame_follows_cursor():
    doc = numbered_document(30)
    doc.cursor_position = CursorPosition(15, 2)
    viewport = Viewport()
    frame = viewport.frame(doc, width=80, height=12)  # 10 body rows
    assert viewport.top_row == 6
    assert frame.rows[0] == "Line 6"
    assert len(frame.rows) == 10
    assert (frame.cursor_y, frame.cursor_x) == (9, 2)


def test_viewport_frame_after_shrink():
    """Shrinking the terminal keeps the cursor on screen."""
    doc = numbered_document(30)
    doc.cursor_position = CursorPosition(9, 0)
    viewport = Viewport()
    viewport.frame(doc, width=80, height=12)
    assert viewport.top_row == 0

    frame = viewport.frame(doc, width=80, height=7)  # 5 body rows
    assert viewport.top_row == 5
    assert frame.rows[0] == "Line 5"
    assert frame.cursor_y == 4


def test_viewport_frame_after_grow_pulls_top_back():
    doc = numbered_document(12)
    doc.cursor_position = CursorPosition(11, 0)
    viewport = Viewport()
    viewport.frame(doc, width=80, height=7)
    assert viewport.top_row == 7

    frame = viewport.frame(doc, width=80, height=22)  # 20 body rows, whole doc fits
    assert viewport.top_row == 0
    assert len(frame.rows) == 12
    assert frame.cursor_y == 11


def test_viewport_reconcile_uses_body_height():
    doc = numbered_document(50)
    doc.cursor_position = CursorPosition(25, 0)
    viewport = Viewport()
    assert viewport.reconcile(doc, 12) == 16
