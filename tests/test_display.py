import pytest

from simonsays.config import SCREEN_HEIGHT, SCREEN_WIDTH
from simonsays.display import CHAR_WIDTH, TextDisplay


def test_begin_reports_availability():
    assert TextDisplay().begin() is True
    assert TextDisplay(available=False).begin() is False


def test_lines_appear_only_after_display():
    d = TextDisplay()
    d.set_text_size(2)
    d.println("Pronti")
    d.println("Partenza")
    assert d.lines() == []
    d.display()
    assert d.lines() == ["Pronti", "Partenza"]
    assert d.frame_count == 1


def test_println_accepts_numbers():
    d = TextDisplay()
    d.println("Record")
    d.println(42)
    d.display()
    assert d.lines() == ["Record", "42"]


def test_print_continues_line():
    d = TextDisplay()
    d.print("Round: ")
    d.println(3)
    d.display()
    assert d.lines() == ["Round: 3"]


def test_clear_display_keeps_cursor():
    d = TextDisplay()
    d.println("Bravo!")
    cursor = d.cursor
    d.clear_display()
    d.display()
    assert d.lines() == []
    assert d.cursor == cursor


def test_wrap_at_right_edge():
    d = TextDisplay()
    d.set_text_size(2)
    text = "ABCDEFGHIJKLMNO"
    d.print(text)
    d.display()
    rows = d.lines()
    assert len(rows) > 1
    assert "".join(rows) == text
    assert all(len(row) * CHAR_WIDTH * 2 <= SCREEN_WIDTH for row in rows)


def test_text_bounds_scale_with_size():
    d = TextDisplay()
    w1, h1 = d.text_bounds("Simon")
    d.set_text_size(2)
    w2, h2 = d.text_bounds("Simon")
    assert (w2, h2) == (2 * w1, 2 * h1)
    assert w1 == CHAR_WIDTH * len("Simon")


def test_text_bounds_empty_and_multiline():
    d = TextDisplay()
    assert d.text_bounds("") == (0, 0)
    assert d.text_bounds("ab\ncd")[1] == 2 * d.text_bounds("ab")[1]


def test_text_size_zero_means_one():
    d = TextDisplay()
    d.set_text_size(0)
    assert d.text_size == 1


def test_centered_text_has_no_leading_padding():
    d = TextDisplay()
    d.set_text_size(2)
    w, _ = d.text_bounds("Simon")
    d.set_cursor((SCREEN_WIDTH - w) // 2, 0)
    d.println("Simon")
    d.display()
    assert d.lines() == ["Simon"]


def test_draw_pixel_clips():
    d = TextDisplay()
    d.draw_pixel(-1, 0)
    d.draw_pixel(SCREEN_WIDTH, 0)
    d.draw_pixel(0, SCREEN_HEIGHT)
    d.draw_pixel(5, 5)
    d.display()
    assert d.shown_pixels == {(5, 5)}


@pytest.mark.parametrize("end", [(20, 10), (10, 30), (0, 10), (10, 0), (25, 25)])
def test_draw_line_includes_endpoints(end):
    d = TextDisplay()
    d.draw_line(10, 10, *end)
    d.display()
    assert (10, 10) in d.shown_pixels
    assert end in d.shown_pixels
    span = max(abs(end[0] - 10), abs(end[1] - 10))
    assert len(d.shown_pixels) == span + 1


def test_display_snapshot_is_independent_of_buffer():
    d = TextDisplay()
    d.draw_pixel(1, 1)
    d.display()
    d.clear_display()
    assert d.shown_pixels == {(1, 1)}