import pytest

from cellwidgets.primitive import (
    Align,
    Key,
    KeyEvent,
    Modifier,
    MouseAction,
    MouseEvent,
    Primitive,
    Screen,
    Style,
    print_text,
    string_width,
)
from cellwidgets.styles import Color


def test_style_foreground_and_background_return_copies():
    base = Style()
    changed = base.foreground(Color.RED).background(Color.BLUE)
    assert changed == Style(fg=Color.RED, bg=Color.BLUE)
    assert base.fg is Color.DEFAULT and base.bg is Color.DEFAULT


def test_screen_size_and_default_content():
    screen = Screen(4, 2)
    assert screen.size() == (4, 2)
    assert screen.get_content(1, 1) == (" ", Style())
    assert screen.row_text(0) == " " * 4


def test_screen_set_get_round_trip():
    screen = Screen(4, 2)
    style = Style(fg=Color.YELLOW)
    screen.set_content(2, 1, "x", style)
    assert screen.get_content(2, 1) == ("x", style)


def test_screen_out_of_range():
    screen = Screen(3, 1)
    screen.set_content(5, 0, "x", Style())
    screen.set_content(-1, 0, "x", Style())
    assert screen.row_text(0) == " " * 3
    assert screen.get_content(9, 9) == ("", Style())
    with pytest.raises(IndexError):
        screen.row_text(1)


def test_show_cursor():
    screen = Screen(3, 3)
    screen.show_cursor(2, 1)
    assert screen.cursor == (2, 1)


def test_events():
    event = KeyEvent(Key.RUNE, "a", Modifier.ALT)
    assert event.modifiers & Modifier.ALT
    assert event.ch == "a"
    assert MouseEvent(3, 4).position() == (3, 4)


def test_string_width():
    assert string_width("abc") == len("abc")
    assert string_width("日本") == 4
    assert string_width("e\u0301") == 1


def test_print_left_truncates():
    screen = Screen(10, 1)
    assert print_text(screen, "abcdef", 0, 0, 3, Align.LEFT, Color.WHITE) == (3, 3)
    assert screen.row_text(0).startswith("abc")
    assert screen.row_text(0)[3:].strip() == ""


def test_print_right_aligned():
    screen = Screen(5, 1)
    result = print_text(screen, "ab", 0, 0, 5, Align.RIGHT, Color.WHITE)
    row = screen.row_text(0)
    assert result == (2, 2)
    assert row.endswith("ab")
    assert row.lstrip() == "ab"


def test_print_right_truncates_from_left():
    screen = Screen(3, 1)
    print_text(screen, "abcde", 0, 0, 3, Align.RIGHT, Color.WHITE)
    assert screen.row_text(0) == "cde"


def test_print_centered_is_balanced():
    screen = Screen(6, 1)
    print_text(screen, "ab", 0, 0, 6, Align.CENTER, Color.WHITE)
    row = screen.row_text(0)
    assert row.strip() == "ab"
    assert len(row) - len(row.lstrip()) == len(row) - len(row.rstrip())


def test_print_keeps_background():
    screen = Screen(3, 1)
    screen.set_content(0, 0, " ", Style(bg=Color.BLUE))
    print_text(screen, "a", 0, 0, 3, Align.LEFT, Color.RED)
    assert screen.get_content(0, 0) == ("a", Style(fg=Color.RED, bg=Color.BLUE))


def test_print_wide_characters():
    screen = Screen(6, 1)
    chars, width = print_text(screen, "日本", 0, 0, 6, Align.LEFT, Color.WHITE)
    assert chars == len("日本")
    assert width == string_width("日本")
    assert screen.row_text(0).startswith("日本")


def test_print_zero_width_does_nothing():
    screen = Screen(3, 1)
    assert print_text(screen, "abc", 0, 0, 0, Align.LEFT, Color.WHITE) == (0, 0)
    assert screen.row_text(0) == " " * 3


def test_rect_round_trip():
    p = Primitive()
    p.set_rect(1, 2, 3, 4)
    assert p.get_rect() == (1, 2, 3, 4)
    assert p.get_inner_rect() == (1, 2, 3, 4)


def test_inner_rect_with_border_and_padding():
    p = Primitive()
    p.set_rect(0, 0, 10, 6)
    p.border = True
    p.set_border_padding(1, 1, 2, 2)
    assert p.get_inner_rect() == (3, 2, 4, 2)


def test_inner_rect_never_negative():
    p = Primitive().set_rect(0, 0, 2, 2).set_border_padding(5, 5, 5, 5)
    _, _, width, height = p.get_inner_rect()
    assert width == 0 and height == 0


def test_in_rect():
    p = Primitive().set_rect(2, 3, 4, 5)
    assert p.in_rect(2, 3)
    assert p.in_rect(5, 7)
    assert not p.in_rect(6, 3)
    assert not p.in_rect(2, 8)


def test_focus_and_blur():
    p = Primitive()
    assert not p.has_focus()
    p.focus(lambda other: None)
    assert p.has_focus()
    p.blur()
    assert not p.has_focus()


def test_mouse_left_down_sets_focus():
    p = Primitive().set_rect(0, 0, 5, 5)
    focused = []
    assert p.handle_mouse(MouseAction.LEFT_DOWN, MouseEvent(1, 1), focused.append) == (True, None)
    assert focused == [p]
    assert p.handle_mouse(MouseAction.LEFT_DOWN, MouseEvent(9, 9), focused.append) == (False, None)
    assert p.handle_mouse(MouseAction.SCROLL_UP, MouseEvent(1, 1), focused.append) == (False, None)


def test_draw_fills_background():
    screen = Screen(5, 3)
    p = Primitive().set_rect(0, 0, 5, 3).set_background_color(Color.BLUE)
    p.draw(screen)
    assert all(screen.get_content(x, y)[1].bg is Color.BLUE for x in range(5) for y in range(3))


def test_draw_without_clear_keeps_content():
    screen = Screen(3, 1)
    screen.set_content(0, 0, "z", Style())
    p = Primitive().set_rect(0, 0, 3, 1)
    p.clear_background = False
    p.draw(screen)
    assert screen.get_content(0, 0)[0] == "z"


def test_draw_border_shape():
    screen = Screen(5, 4)
    p = Primitive().set_rect(0, 0, 5, 4)
    p.border = True
    p.draw(screen)
    top, bottom = screen.row_text(0), screen.row_text(3)
    assert top[1:4] == bottom[1:4]
    assert len(set(top[1:4])) == 1 and top[1] != " "
    assert screen.get_content(0, 1)[0] == screen.get_content(4, 2)[0]
    corners = {top[0], top[4], bottom[0], bottom[4]}
    assert len(corners) == 4


def test_focused_border_differs():
    plain, focused = Screen(4, 3), Screen(4, 3)
    p = Primitive().set_rect(0, 0, 4, 3)
    p.border = True
    p.draw(plain)
    p.focus(None)
    p.draw(focused)
    assert plain.row_text(0) != focused.row_text(0)