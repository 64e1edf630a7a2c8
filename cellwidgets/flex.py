"""A flexbox-style layout that places widgets side by side or stacked."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .primitive import KeyEvent, MouseAction, MouseEvent, Primitive, Screen, SetFocus

FLEX_ROW = 0  # One item per row.
FLEX_COLUMN = 1  # One item per column.
FLEX_ROW_CSS = 1  # As in CSS: items distributed along a row.
FLEX_COLUMN_CSS = 0  # As in CSS: items distributed within a column.


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


@dataclass
class _FlexItem:
    item: Optional[Primitive]
    fixed_size: int
    proportion: int
    focus: bool


class Flex(Primitive):
    """Arranges widgets horizontally (columns) or vertically (rows).

    Each item has either a fixed size or a proportion of the remaining space.
    The background is not cleared, so empty items leave it unchanged.
    """

    def __init__(self):
        super().__init__()
        self._items: list[_FlexItem] = []
        self._direction = FLEX_COLUMN
        self._full_screen = False
        self.clear_background = False

    def set_direction(self, direction: int) -> Flex:
        """Set FLEX_COLUMN (default) or FLEX_ROW."""
        self._direction = direction
        return self

    def set_full_screen(self, full_screen: bool) -> Flex:
        """Use the whole screen instead of the assigned rectangle."""
        self._full_screen = full_screen
        return self

    def add_item(self, item: Optional[Primitive], fixed_size: int, proportion: int,
                 focus: bool) -> Flex:
        """Append an item; a fixed size of 0 makes it proportional."""
        self._items.append(_FlexItem(item, fixed_size, proportion, focus))
        return self

    def remove_item(self, p: Optional[Primitive]) -> Flex:
        """Remove every item holding the given widget."""
        self._items = [entry for entry in self._items if entry.item is not p]
        return self

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Optional[Primitive]:
        return self._items[index].item

    def clear(self) -> Flex:
        """Remove all items."""
        self._items = []
        return self

    def resize_item(self, p: Optional[Primitive], fixed_size: int, proportion: int) -> Flex:
        """Change the size settings of every item holding the given widget."""
        for entry in self._items:
            if entry.item is p:
                entry.fixed_size = fixed_size
                entry.proportion = proportion
        return self

    def draw(self, screen: Screen) -> None:
        super().draw(screen)

        if self._full_screen:
            width, height = screen.size()
            self.set_rect(0, 0, width, height)

        x, y, width, height = self.get_inner_rect()
        rows = self._direction == FLEX_ROW
        dist_size = height if rows else width
        proportion_sum = 0
        for entry in self._items:
            if entry.fixed_size > 0:
                dist_size -= entry.fixed_size
            else:
                proportion_sum += entry.proportion

        pos = y if rows else x
        deferred: list[Primitive] = []
        for entry in self._items:
            size = entry.fixed_size
            if size <= 0:
                if proportion_sum > 0:
                    size = _div(dist_size * entry.proportion, proportion_sum)
                    dist_size -= size
                    proportion_sum -= entry.proportion
                else:
                    size = 0
            if entry.item is not None:
                if self._direction == FLEX_COLUMN:
                    entry.item.set_rect(pos, y, size, height)
                else:
                    entry.item.set_rect(x, pos, width, size)
            pos += size

            if entry.item is not None:
                if entry.item.has_focus():
                    deferred.append(entry.item)
                else:
                    entry.item.draw(screen)

        for item in reversed(deferred):
            item.draw(screen)

    def focus(self, delegate: Optional[SetFocus]) -> None:
        for entry in self._items:
            if entry.item is not None and entry.focus:
                delegate(entry.item)
                return
        super().focus(delegate)

    def has_focus(self) -> bool:
        if any(entry.item is not None and entry.item.has_focus() for entry in self._items):
            return True
        return super().has_focus()

    def handle_mouse(self, action: MouseAction, event: MouseEvent,
                     set_focus: SetFocus) -> tuple[bool, Optional[Primitive]]:
        if not self.in_rect(*event.position()):
            return False, None
        consumed, capture = False, None
        for entry in self._items:
            if entry.item is None:
                continue
            consumed, capture = entry.item.handle_mouse(action, event, set_focus)
            if consumed:
                break
        return consumed, capture

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None:
        for entry in self._items:
            if entry.item is not None and entry.item.has_focus():
                entry.item.handle_key(event, set_focus)
                return