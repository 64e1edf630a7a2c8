"""A form combining one-line input items in a vertical or horizontal layout."""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Protocol

from .inputfield import InputField
from .primitive import (
    Key,
    KeyEvent,
    MouseAction,
    MouseEvent,
    Primitive,
    Screen,
    SetFocus,
    string_width,
)
from .styles import STYLES, Color

DEFAULT_FORM_FIELD_WIDTH = 10
"""Screen width of flexible fields (width 0) in horizontal layouts."""


class FormItem(Protocol):
    """What a widget must offer to be placed in a form."""

    def get_label(self) -> str:
        """Return the item's label text."""

    def set_form_attributes(self, label_width: int, label_color: Color, bg_color: Color,
                            field_text_color: Color, field_bg_color: Color) -> FormItem:
        """Set the attributes a form shares between its items."""

    def get_field_width(self) -> int:
        """Return the field's width in cells; 0 means flexible."""

    def set_finished_func(self, handler: Callable[[Key], None]) -> FormItem:
        """Set the handler called with the key that ended input."""

    def set_rect(self, x: int, y: int, width: int, height: int) -> None: ...

    def draw(self, screen: Screen) -> None: ...

    def has_focus(self) -> bool: ...

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None: ...

    def handle_mouse(self, action: MouseAction, event: MouseEvent,
                     set_focus: SetFocus) -> tuple[bool, Optional[Primitive]]: ...


class _Position(NamedTuple):
    x: int
    y: int
    width: int
    height: int


class Form(Primitive):
    """Lays out one-line items from top to bottom, or left to right."""

    def __init__(self):
        super().__init__()
        self.set_border_padding(1, 1, 1, 1)
        self._items: list[FormItem] = []
        self._horizontal = False
        self._item_padding = 1
        self._focused_element = 0
        self._label_color: Color = STYLES.secondary_text_color
        self._field_background_color: Color = STYLES.contrast_background_color
        self._field_text_color: Color = STYLES.primary_text_color
        self._cancel: Optional[Callable[[], None]] = None

    def set_item_padding(self, padding: int) -> Form:
        """Set the empty rows (vertical) or cells (horizontal) between items."""
        self._item_padding = padding
        return self

    def set_horizontal(self, horizontal: bool) -> Form:
        """Lay items out left to right, wrapping into new rows."""
        self._horizontal = horizontal
        return self

    def set_label_color(self, color: Color) -> Form:
        """Set the colour of the labels."""
        self._label_color = color
        return self

    def set_field_background_color(self, color: Color) -> Form:
        """Set the background colour of the input areas."""
        self._field_background_color = color
        return self

    def set_field_text_color(self, color: Color) -> Form:
        """Set the text colour of the input areas."""
        self._field_text_color = color
        return self

    def set_focus(self, index: int) -> Form:
        """Choose the item that receives focus when the form is focused."""
        if index < 0:
            self._focused_element = 0
        elif index >= len(self._items):
            self._focused_element = len(self._items)
        else:
            self._focused_element = index
        return self

    def add_input_field(self, label: str, value: str, field_width: int,
                        accept: Optional[Callable[[str, str], bool]],
                        changed: Optional[Callable[[str], None]]) -> Form:
        """Add an input field with a label, initial value and optional callbacks."""
        field = (InputField()
                 .set_label(label)
                 .set_text(value)
                 .set_field_width(field_width)
                 .set_acceptance_func(accept)
                 .set_changed_func(changed))
        self._items.append(field)
        return self

    def add_password_field(self, label: str, value: str, field_width: int, mask: str,
                           changed: Optional[Callable[[str], None]]) -> Form:
        """Add an input field whose text is masked; an empty mask means '*'."""
        field = (InputField()
                 .set_label(label)
                 .set_text(value)
                 .set_field_width(field_width)
                 .set_mask_character(mask or "*")
                 .set_changed_func(changed))
        self._items.append(field)
        return self

    def clear(self) -> Form:
        """Remove all items."""
        self._items = []
        self._focused_element = 0
        return self

    def add_form_item(self, item: FormItem) -> Form:
        """Add a custom item; its label width and colours are set by the form."""
        self._items.append(item)
        return self

    def __len__(self) -> int:
        return len(self._items)

    def get_form_item(self, index: int) -> FormItem:
        """Return the item at the given position."""
        return self._items[index]

    def remove_form_item(self, index: int) -> Form:
        """Remove the item at the given position."""
        del self._items[index]
        return self

    def get_form_item_by_label(self, label: str) -> Optional[FormItem]:
        """Return the first item with the given label, or None."""
        return next((item for item in self._items if item.get_label() == label), None)

    def get_form_item_index(self, label: str) -> int:
        """Return the index of the first item with the given label, or -1."""
        return next((index for index, item in enumerate(self._items)
                     if item.get_label() == label), -1)

    def get_focused_item_index(self) -> int:
        """Return the index of the item that has focus, or -1."""
        return self._focus_index()

    def set_cancel_func(self, callback: Optional[Callable[[], None]]) -> Form:
        """Call callback when the user presses Escape."""
        self._cancel = callback
        return self

    def _focus_index(self) -> int:
        return next((index for index, item in enumerate(self._items) if item.has_focus()), -1)

    def draw(self, screen: Screen) -> None:
        super().draw(screen)

        index = self._focus_index()
        if index >= 0:
            self._focused_element = index

        x, y, width, height = self.get_inner_rect()
        top_limit = y
        bottom_limit = y + height
        right_limit = x + width
        start_x = x

        max_label_width = max((string_width(item.get_label()) for item in self._items),
                              default=0) + 1

        positions: list[_Position] = []
        focused_position = _Position(0, 0, 0, 0)
        for item in self._items:
            if self._horizontal:
                field_width = item.get_field_width() or DEFAULT_FORM_FIELD_WIDTH
                label_width = string_width(item.get_label()) + 1
                item_width = label_width + field_width
            else:
                label_width = max_label_width
                item_width = width

            if self._horizontal and x + label_width + 1 >= right_limit:
                x = start_x
                y += 2

            if x + item_width >= right_limit:
                item_width = right_limit - x
            item.set_form_attributes(label_width, self._label_color, self.background_color,
                                     self._field_text_color, self._field_background_color)

            position = _Position(x, y, item_width, 1)
            positions.append(position)
            if item.has_focus():
                focused_position = position

            if self._horizontal:
                x += item_width + self._item_padding
            else:
                y += 1 + self._item_padding

        offset = 0
        focused_bottom = focused_position.y + focused_position.height
        if focused_bottom > bottom_limit:
            offset = focused_bottom - bottom_limit
            if focused_position.y - offset < top_limit:
                offset = focused_position.y - top_limit

        deferred: list[FormItem] = []
        for item, position in zip(self._items, positions):
            item_y = position.y - offset
            item.set_rect(position.x, item_y, position.width, position.height)
            if item_y + position.height <= top_limit or item_y >= bottom_limit:
                continue
            if item.has_focus():
                deferred.append(item)
            else:
                item.draw(screen)
        for item in reversed(deferred):
            item.draw(screen)

    def focus(self, delegate: Optional[SetFocus]) -> None:
        if not self._items:
            super().focus(delegate)
            return
        self._has_focus = False

        if not 0 <= self._focused_element < len(self._items):
            self._focused_element = 0

        def handler(key: Key) -> None:
            if key in (Key.TAB, Key.ENTER):
                self._focused_element += 1
                self.focus(delegate)
            elif key is Key.BACKTAB:
                self._focused_element -= 1
                if self._focused_element < 0:
                    self._focused_element = len(self._items) - 1
                self.focus(delegate)
            elif key is Key.ESCAPE:
                if self._cancel is not None:
                    self._cancel()
                else:
                    self._focused_element = 0
                    self.focus(delegate)

        item = self._items[self._focused_element]
        item.set_finished_func(handler)
        delegate(item)

    def has_focus(self) -> bool:
        if self._focus_index() >= 0:
            return True
        return super().has_focus()

    def handle_mouse(self, action: MouseAction, event: MouseEvent,
                     set_focus: SetFocus) -> tuple[bool, Optional[Primitive]]:
        consumed, capture = False, None
        for item in self._items:
            consumed, capture = item.handle_mouse(action, event, set_focus)
            if consumed:
                break
        else:
            # A click elsewhere returns focus to the last selected item.
            if action is MouseAction.LEFT_CLICK and self.in_rect(*event.position()):
                consumed = True

        if consumed:
            index = self._focus_index()
            if index >= 0:
                self._focused_element = index
        return consumed, capture

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None:
        for item in self._items:
            if item is not None and item.has_focus():
                item.handle_key(event, set_focus)
                return