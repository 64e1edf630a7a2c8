import pytest

from cellwidgets.flex import FLEX_COLUMN, FLEX_ROW, Flex
from cellwidgets.primitive import (
    Key,
    KeyEvent,
    MouseAction,
    MouseEvent,
    Primitive,
    Screen,
)


class Recorder(Primitive):
    def __init__(self, name, log=None, consume=True):
        super().__init__()
        self.name = name
        self.log = log if log is not None else []
        self.keys = []
        self.consume = consume

    def draw(self, screen):
        self.log.append(self.name)

    def handle_key(self, event, set_focus):
        self.keys.append(event)

    def handle_mouse(self, action, event, set_focus):
        self.log.append(("mouse", self.name))
        return self.consume, None


class Painter(Primitive):
    """Writes its name into the top-left screen cell, so the last one drawn wins."""

    def __init__(self, name):
        super().__init__()
        self.name = name

    def draw(self, screen):
        screen.set_content(0, 0, self.name, screen.get_content(0, 0)[1])


def test_add_len_getitem_clear():
    a, b = Primitive(), Primitive()
    flex = Flex().add_item(a, 0, 1, False).add_item(b, 3, 0, False)
    assert len(flex) == 2
    assert flex[0] is a
    assert flex[1] is b
    flex.clear()
    assert len(flex) == 0
    with pytest.raises(IndexError):
        flex[0]


def test_remove_item_removes_all_occurrences_keeping_order():
    a, b, c = Primitive(), Primitive(), Primitive()
    flex = Flex()
    for item in (a, b, a, c, a):
        flex.add_item(item, 0, 1, False)
    flex.remove_item(a)
    assert [flex[i] for i in range(len(flex))] == [b, c]


def test_column_layout_fills_width_contiguously():
    a, b, c = Primitive(), Primitive(), Primitive()
    flex = Flex().add_item(a, 10, 0, False).add_item(b, 0, 1, False).add_item(c, 0, 1, False)
    flex.set_rect(0, 0, 30, 5)
    flex.draw(Screen(30, 5))
    ax, ay, aw, ah = a.get_rect()
    bx, by, bw, bh = b.get_rect()
    cx, cy, cw, ch = c.get_rect()
    assert (ax, aw) == (0, 10)
    assert bx == ax + aw
    assert cx == bx + bw
    assert aw + bw + cw == 30
    assert bw == cw
    assert ah == bh == ch == 5
    assert ay == by == cy == 0


def test_row_layout_distributes_height_by_proportion():
    a, b = Primitive(), Primitive()
    flex = Flex().set_direction(FLEX_ROW).add_item(a, 0, 2, False).add_item(b, 0, 1, False)
    flex.set_rect(0, 0, 8, 30)
    flex.draw(Screen(8, 30))
    _, ay, aw, ah = a.get_rect()
    _, by, bw, bh = b.get_rect()
    assert ah == 2 * bh
    assert ah + bh == 30
    assert by == ay + ah
    assert aw == bw == 8


def test_none_item_consumes_space():
    a = Primitive()
    flex = Flex().add_item(None, 5, 0, False).add_item(a, 0, 1, False)
    flex.set_rect(0, 0, 20, 3)
    flex.draw(Screen(20, 3))
    x, _, width, _ = a.get_rect()
    assert x == 5
    assert width == 15


def test_resize_item_changes_layout():
    a, b = Primitive(), Primitive()
    flex = Flex().add_item(a, 0, 1, False).add_item(b, 0, 1, False)
    flex.resize_item(a, 7, 0)
    flex.set_rect(0, 0, 20, 3)
    flex.draw(Screen(20, 3))
    assert a.get_rect()[2] == 7
    assert b.get_rect()[0] == 7


def test_full_screen_uses_screen_size():
    flex = Flex().set_full_screen(True)
    flex.set_rect(3, 3, 5, 5)
    flex.draw(Screen(40, 12))
    assert flex.get_rect() == (0, 0, 40, 12)


def test_flex_does_not_clear_background():
    screen = Screen(10, 2)
    screen.set_content(2, 0, "x", screen.get_content(2, 0)[1])
    flex = Flex().add_item(None, 0, 1, False)
    flex.set_rect(0, 0, 10, 2)
    flex.draw(screen)
    assert screen.get_content(2, 0)[0] == "x"


def test_focused_item_drawn_last():
    a, b, c = Painter("a"), Painter("b"), Painter("c")
    a.focus(None)
    flex = Flex().set_direction(FLEX_COLUMN)
    for item in (a, b, c):
        flex.add_item(item, 0, 1, False)
    flex.set_rect(0, 0, 9, 1)
    screen = Screen(9, 1)
    flex.draw(screen)
    assert screen.get_content(0, 0)[0] == "a"


def test_unfocused_items_drawn_in_order():
    a, b, c = Painter("a"), Painter("b"), Painter("c")
    flex = Flex()
    for item in (a, b, c):
        flex.add_item(item, 0, 1, False)
    flex.set_rect(0, 0, 9, 1)
    screen = Screen(9, 1)
    flex.draw(screen)
    assert screen.get_content(0, 0)[0] == "c"


def test_focus_delegates_to_first_focus_item():
    a, b = Primitive(), Primitive()
    flex = Flex().add_item(None, 0, 1, True).add_item(a, 0, 1, False).add_item(b, 0, 1, True)
    received = []
    flex.focus(received.append)
    assert received == [b]


def test_focus_without_focus_items_takes_focus_itself():
    flex = Flex().add_item(Primitive(), 0, 1, False)
    received = []
    flex.focus(received.append)
    assert received == []
    assert flex.has_focus() is True


def test_has_focus_follows_child():
    a = Primitive()
    flex = Flex().add_item(a, 0, 1, False)
    assert flex.has_focus() is False
    a.focus(None)
    assert flex.has_focus() is True


def test_handle_key_goes_to_focused_child():
    a, b = Recorder("a"), Recorder("b")
    b.focus(None)
    flex = Flex().add_item(a, 0, 1, False).add_item(b, 0, 1, False)
    event = KeyEvent(Key.ENTER)
    flex.handle_key(event, lambda p: None)
    assert b.keys == [event]
    assert a.keys == []


def test_handle_mouse_outside_rect_is_not_consumed():
    log = []
    flex = Flex().add_item(Recorder("a", log), 0, 1, False)
    flex.set_rect(0, 0, 5, 5)
    assert flex.handle_mouse(MouseAction.LEFT_CLICK, MouseEvent(10, 10), lambda p: None) == (False, None)
    assert log == []


def test_handle_mouse_stops_at_first_consumer():
    log = []
    a = Recorder("a", log, consume=False)
    b = Recorder("b", log, consume=True)
    c = Recorder("c", log, consume=True)
    flex = Flex().add_item(a, 0, 1, False).add_item(None, 0, 1, False)
    flex.add_item(b, 0, 1, False).add_item(c, 0, 1, False)
    flex.set_rect(0, 0, 5, 5)
    consumed, _ = flex.handle_mouse(MouseAction.LEFT_CLICK, MouseEvent(1, 1), lambda p: None)
    assert consumed is True
    assert log == [("mouse", "a"), ("mouse", "b")]