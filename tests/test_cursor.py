import pytest

from quadkit.cursor import Cursor, Layout, Scroll
from quadkit.geometry import Rect, Vec2

MARGIN = 2.0


def make_cursor(x=0.0, y=0.0, w=100.0, h=100.0):
    return Cursor(Rect(x, y, w, h), MARGIN)


def test_new_cursor_starts_at_margin():
    c = make_cursor()
    assert c.current_position() == Vec2(MARGIN, MARGIN)
    assert c.scroll.inner_rect == Rect(0.0, 0.0, 100.0, 100.0)


def test_vertical_fit_stacks_rows():
    c = make_cursor()
    size = Vec2(10.0, 8.0)
    first = c.fit(size, Layout.VERTICAL)
    second = c.fit(size, Layout.VERTICAL)
    assert first == Vec2(MARGIN, MARGIN)
    assert second.x == first.x
    assert second.y == first.y + size.y + MARGIN


def test_horizontal_fit_same_row():
    c = make_cursor()
    size = Vec2(10.0, 8.0)
    first = c.fit(size, Layout.HORIZONTAL)
    second = c.fit(size, Layout.HORIZONTAL)
    assert second.y == first.y
    assert second.x == first.x + size.x + MARGIN


def test_horizontal_fit_wraps_when_full():
    c = make_cursor(w=30.0)
    size = Vec2(20.0, 5.0)
    first = c.fit(size, Layout.HORIZONTAL)
    second = c.fit(size, Layout.HORIZONTAL)
    assert second.x == MARGIN + 1.0
    assert second.y == first.y + size.y + MARGIN


def test_free_layout_offsets_by_area():
    c = make_cursor(x=50.0, y=60.0)
    point = Vec2(7.0, 9.0)
    res = c.fit(Vec2(1.0, 1.0), point)
    assert res == point + Vec2(50.0, 60.0)
    assert c.current_position() == Vec2(50.0 + MARGIN, 60.0 + MARGIN)


def test_fit_includes_ident():
    c = make_cursor()
    c.ident = 5.0
    res = c.fit(Vec2(1.0, 1.0), Layout.VERTICAL)
    assert res == Vec2(MARGIN + 5.0, MARGIN)


def test_next_same_line_forces_horizontal():
    c = make_cursor()
    size = Vec2(10.0, 8.0)
    first = c.fit(size, Layout.VERTICAL)
    c.next_same_line = 40.0
    second = c.fit(size, Layout.VERTICAL)
    assert second == Vec2(40.0, first.y)
    assert c.next_same_line is None


def test_inner_rect_grows_with_content():
    c = make_cursor()
    size = Vec2(10.0, 200.0)
    c.fit(size, Layout.VERTICAL)
    assert c.scroll.inner_rect.bottom == MARGIN + size.y


def test_reset_rewinds_and_rolls_inner_rect():
    c = make_cursor()
    c.fit(Vec2(10.0, 200.0), Layout.VERTICAL)
    grown = c.scroll.inner_rect
    c.ident = 3.0
    c.reset()
    assert (c.x, c.y, c.ident, c.max_row_y) == (MARGIN, MARGIN, 0.0, 0.0)
    assert c.scroll.inner_rect_previous_frame == grown
    assert c.scroll.inner_rect == Rect(0.0, 0.0, 100.0, 100.0)


def test_unknown_layout_rejected():
    c = make_cursor()
    with pytest.raises(TypeError):
        c.fit(Vec2(1.0, 1.0), "diagonal")


def test_scroll_to_clamps():
    s = Scroll(
        rect=Rect(0.0, 0.0, 10.0, 10.0),
        inner_rect=Rect(0.0, 0.0, 10.0, 50.0),
        inner_rect_previous_frame=Rect(0.0, 0.0, 10.0, 50.0),
    )
    s.scroll_to(-5.0)
    assert s.rect.y == s.inner_rect_previous_frame.y
    s.scroll_to(1000.0)
    prev = s.inner_rect_previous_frame
    assert s.rect.y == prev.h - s.rect.h + prev.y
    s.scroll_to(12.0)
    assert s.rect.y == 12.0


def test_scroll_update_clamps_current():
    s = Scroll(
        rect=Rect(0.0, 500.0, 10.0, 10.0),
        inner_rect=Rect(0.0, 0.0, 10.0, 50.0),
        inner_rect_previous_frame=Rect(0.0, 0.0, 10.0, 50.0),
    )
    s.update()
    prev = s.inner_rect_previous_frame
    assert s.rect.y == prev.h - s.rect.h + prev.y