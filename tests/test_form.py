import pytest

from cellwidgets.form import DEFAULT_FORM_FIELD_WIDTH, Form
from cellwidgets.inputfield import InputField
from cellwidgets.primitive import Key, MouseAction, Primitive, Screen
from cellwidgets.styles import STYLES


class FakeItem(Primitive):
    def __init__(self, label, field_width=0, consume=False):
        super().__init__()
        self.label = label
        self.field_width = field_width
        self.consume = consume
        self.focused = False
        self.finished = None
        self.attributes = None
        self.keys = []

    def get_label(self):
        return self.label

    def set_form_attributes(self, label_width, label_color, bg_color,
                            field_text_color, field_bg_color):
        self.attributes = (label_width, label_color, bg_color, field_text_color,
                           field_bg_color)
        return self

    def get_field_width(self):
        return self.field_width

    def set_finished_func(self, handler):
        self.finished = handler
        return self

    def has_focus(self):
        return self.focused

    def handle_key(self, event, set_focus):
        self.keys.append(event)

    def handle_mouse(self, action, event, set_focus):
        if self.consume:
            self.focused = True
            return True, None
        return False, None


class FakeMouse:
    def __init__(self, x, y):
        self._pos = (x, y)

    def position(self):
        return self._pos


def make_form(*labels):
    form = Form()
    items = [FakeItem(label) for label in labels]
    for item in items:
        form.add_form_item(item)
    return form, items


def test_lookup_by_label_and_index():
    form, items = make_form("First", "Second")
    assert len(form) == 2
    assert form.get_form_item(1) is items[1]
    assert form.get_form_item_by_label("Second") is items[1]
    assert form.get_form_item_by_label("Missing") is None
    assert form.get_form_item_index("First") == 0
    assert form.get_form_item_index("Missing") == -1


def test_remove_and_clear():
    form, items = make_form("a", "b", "c")
    form.remove_form_item(1)
    assert [form.get_form_item(i) for i in range(len(form))] == [items[0], items[2]]
    form.clear()
    assert len(form) == 0
    with pytest.raises(IndexError):
        form.get_form_item(0)


def test_add_input_field_sets_value_without_calling_changed():
    calls = []
    form = Form().add_input_field("Name", "Bob", 12, None, calls.append)
    field = form.get_form_item(0)
    assert isinstance(field, InputField)
    assert field.get_label() == "Name"
    assert field.get_text() == "Bob"
    assert field.get_field_width() == 12
    assert calls == []


def test_focus_delegates_to_first_item_and_tab_moves_on():
    form, items = make_form("a", "b", "c")
    delegated = []
    form.focus(delegated.append)
    assert delegated == [items[0]]
    items[0].finished(Key.TAB)
    assert delegated[-1] is items[1]
    items[1].finished(Key.ENTER)
    assert delegated[-1] is items[2]
    items[2].finished(Key.TAB)
    assert delegated[-1] is items[0]


def test_backtab_wraps_to_last_item():
    form, items = make_form("a", "b", "c")
    delegated = []
    form.focus(delegated.append)
    items[0].finished(Key.BACKTAB)
    assert delegated[-1] is items[2]


def test_escape_calls_cancel_or_returns_to_first():
    form, items = make_form("a", "b")
    delegated = []
    form.set_focus(1)
    form.focus(delegated.append)
    assert delegated[-1] is items[1]
    items[1].finished(Key.ESCAPE)
    assert delegated[-1] is items[0]

    cancelled = []
    form.set_cancel_func(lambda: cancelled.append(True))
    count = len(delegated)
    items[0].finished(Key.ESCAPE)
    assert cancelled == [True]
    assert len(delegated) == count


@pytest.mark.parametrize("index,expected", [(-5, 0), (1, 1), (99, 0)])
def test_set_focus_is_clamped(index, expected):
    form, items = make_form("a", "b")
    delegated = []
    form.set_focus(index).focus(delegated.append)
    assert delegated == [items[expected]]


def test_focused_item_index_and_has_focus():
    form, items = make_form("a", "b")
    assert form.get_focused_item_index() == -1
    items[1].focused = True
    assert form.get_focused_item_index() == 1
    assert form.has_focus() is True


def test_handle_key_goes_to_focused_item():
    form, items = make_form("a", "b")
    items[1].focused = True
    event = object()
    form.handle_key(event, lambda p: None)
    assert items[1].keys == [event]
    assert items[0].keys == []


def test_mouse_consumed_by_item_updates_focus():
    form = Form()
    first, second = FakeItem("a"), FakeItem("b", consume=True)
    form.add_form_item(first).add_form_item(second)
    form.set_rect(0, 0, 20, 10)
    consumed, capture = form.handle_mouse(MouseAction.LEFT_CLICK, FakeMouse(3, 3),
                                          lambda p: None)
    assert (consumed, capture) == (True, None)
    assert form.get_focused_item_index() == 1


def test_mouse_click_inside_form_is_consumed_outside_is_not():
    form, _ = make_form("a")
    form.set_rect(0, 0, 20, 10)
    inside = form.handle_mouse(MouseAction.LEFT_CLICK, FakeMouse(5, 5), lambda p: None)
    outside = form.handle_mouse(MouseAction.LEFT_CLICK, FakeMouse(50, 50), lambda p: None)
    assert inside[0] is True
    assert outside[0] is False


def test_vertical_draw_aligns_labels_and_passes_colors():
    form, items = make_form("A", "Long")
    form.set_label_color(STYLES.tertiary_text_color)
    form.set_rect(0, 0, 30, 8)
    form.draw(Screen(30, 8))
    label_width = len("Long") + 1
    assert items[0].attributes[0] == label_width
    assert items[1].attributes[0] == label_width
    assert items[0].attributes[1] == STYLES.tertiary_text_color
    first, second = tuple(items[0].get_rect()), tuple(items[1].get_rect())
    x, y, width, _ = form.get_inner_rect()
    assert first[0] == x and first[1] == y
    assert first[2] == width
    assert second[1] == first[1] + 2


def test_item_padding_changes_row_spacing():
    form, items = make_form("a", "b")
    form.set_item_padding(0)
    form.set_rect(0, 0, 30, 8)
    form.draw(Screen(30, 8))
    assert tuple(items[1].get_rect())[1] == tuple(items[0].get_rect())[1] + 1


def test_horizontal_draw_places_items_side_by_side():
    form = Form().set_horizontal(True)
    first, second = FakeItem("A", field_width=5), FakeItem("B")
    form.add_form_item(first).add_form_item(second)
    form.set_rect(0, 0, 60, 6)
    form.draw(Screen(60, 6))
    fx, fy, fw, _ = first.get_rect()
    sx, sy, sw, _ = second.get_rect()
    assert fw == len("A") + 1 + 5
    assert sw == len("B") + 1 + DEFAULT_FORM_FIELD_WIDTH
    assert sy == fy
    assert sx == fx + fw + 1


def test_focused_item_is_scrolled_into_view():
    form, items = make_form("a", "b", "c", "d", "e")
    items[4].focused = True
    form.set_rect(0, 0, 20, 4)
    form.draw(Screen(20, 4))
    _, top, _, height = form.get_inner_rect()
    y = tuple(items[4].get_rect())[1]
    assert top <= y < top + height


def test_draw_shows_input_text_and_masks_password():
    form = Form()
    form.add_input_field("Name", "Bob", 10, None, None)
    form.add_password_field("Pin", "abc", 10, "", None)
    form.set_rect(0, 0, 30, 6)
    screen = Screen(30, 6)
    form.draw(screen)
    _, y0, _, _ = form.get_form_item(0).get_rect()
    _, y1, _, _ = form.get_form_item(1).get_rect()
    assert "Name" in screen.row_text(y0)
    assert "Bob" in screen.row_text(y0)
    assert "***" in screen.row_text(y1)
    assert "abc" not in screen.row_text(y1)