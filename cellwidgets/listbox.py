"""A widget showing rows of selectable items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .primitive import (
    Align,
    Key,
    KeyEvent,
    MouseAction,
    MouseEvent,
    Primitive,
    Screen,
    SetFocus,
    Style,
    print_text,
    string_width,
)
from .styles import STYLES, Color

ItemCallback = Callable[[int, str, str, str], None]


@dataclass
class _ListItem:
    main_text: str
    secondary_text: str
    shortcut: str
    selected: Optional[Callable[[], None]]


def _clusters(text: str) -> list[tuple[int, int, int]]:
    """Split text into (start, end, width) groups of a base character and its marks."""
    clusters: list[tuple[int, int, int]] = []
    for index, ch in enumerate(text):
        width = string_width(ch)
        if width == 0 and clusters:
            start, _, previous_width = clusters[-1]
            clusters[-1] = (start, index + 1, previous_width)
        else:
            clusters.append((index, index + 1, width))
    return clusters


def _print_row(screen: Screen, text: str, x: int, y: int, skip: int,
               max_width: int, color: Color) -> tuple[int, int]:
    """Print text left-aligned after skipping ``skip`` cells.

    Keeps each cell's background. Returns the printed width and the index in
    the text up to which it was consumed.
    """
    clusters = _clusters(text)
    skipped = 0
    position = 0
    while position < len(clusters) and skipped < skip:
        skipped += clusters[position][2]
        position += 1
    end = clusters[position - 1][1] if position > 0 else 0
    printed = 0
    column = x
    for start, stop, width in clusters[position:]:
        if printed + width > max_width:
            break
        if width > 0:
            _, existing = screen.get_content(column, y)
            style = Style(fg=color, bg=existing.bg)
            screen.set_content(column, y, text[start:stop], style)
            for extra in range(1, width):
                screen.set_content(column + extra, y, "", style)
        column += width
        printed += width
        end = stop
    return printed, end


class List(Primitive):
    """Rows of items with main and secondary texts, each of which can be selected."""

    def __init__(self):
        super().__init__()
        self._items: list[_ListItem] = []
        self._current_item = 0
        self._show_secondary_text = True
        self._main_text_color: Color = STYLES.primary_text_color
        self._secondary_text_color: Color = STYLES.tertiary_text_color
        self._shortcut_color: Color = STYLES.secondary_text_color
        self._selected_text_color: Color = STYLES.primitive_background_color
        self._selected_background_color: Color = STYLES.primary_text_color
        self._selected_focus_only = False
        self._highlight_full_line = False
        self._wrap_around = True
        self._item_offset = 0
        self._horizontal_offset = 0
        self._overflowing = False
        self._changed: Optional[ItemCallback] = None
        self._selected: Optional[ItemCallback] = None
        self._done: Optional[Callable[[], None]] = None

    def _fire_changed(self, index: int) -> None:
        if self._changed is not None:
            item = self._items[index]
            self._changed(index, item.main_text, item.secondary_text, item.shortcut)

    def _fire_selected(self, index: int) -> None:
        item = self._items[index]
        if item.selected is not None:
            item.selected()
        if self._selected is not None:
            self._selected(index, item.main_text, item.secondary_text, item.shortcut)

    def _clamp_index(self, index: int) -> int:
        if index < 0:
            index += len(self._items)
        if index >= len(self._items):
            index = len(self._items) - 1
        return max(index, 0)

    def set_current_item(self, index: int) -> List:
        """Select an item; negative indices count from the back, others are clamped."""
        index = self._clamp_index(index)
        if index != self._current_item and self._items:
            self._fire_changed(index)
        self._current_item = index
        return self

    def get_current_item(self) -> int:
        """Return the index of the selected item."""
        return self._current_item

    def set_offset(self, items: int, horizontal: int) -> List:
        """Set how many items and cells are skipped when drawing."""
        self._item_offset = items
        self._horizontal_offset = horizontal
        return self

    def get_offset(self) -> tuple[int, int]:
        """Return (item offset, horizontal offset)."""
        return self._item_offset, self._horizontal_offset

    def remove_item(self, index: int) -> List:
        """Remove an item; out-of-range indices are clamped, negatives count back."""
        if not self._items:
            return self
        index = self._clamp_index(index)
        del self._items[index]
        if not self._items:
            return self
        previous = self._current_item
        if self._current_item >= index:
            self._current_item = max(self._current_item - 1, 0)
        if previous == index:
            self._fire_changed(self._current_item)
        return self

    def set_main_text_color(self, color: Color) -> List:
        """Set the colour of main texts."""
        self._main_text_color = color
        return self

    def set_secondary_text_color(self, color: Color) -> List:
        """Set the colour of secondary texts."""
        self._secondary_text_color = color
        return self

    def set_shortcut_color(self, color: Color) -> List:
        """Set the colour of shortcuts."""
        self._shortcut_color = color
        return self

    def set_selected_text_color(self, color: Color) -> List:
        """Set the text colour of the selected item."""
        self._selected_text_color = color
        return self

    def set_selected_background_color(self, color: Color) -> List:
        """Set the background colour of the selected item."""
        self._selected_background_color = color
        return self

    def set_selected_focus_only(self, focus_only: bool) -> List:
        """Highlight the selection only while the list has focus."""
        self._selected_focus_only = focus_only
        return self

    def set_highlight_full_line(self, highlight: bool) -> List:
        """Highlight the whole row of the selected item, not just its text."""
        self._highlight_full_line = highlight
        return self

    def show_secondary_text(self, show: bool) -> List:
        """Show or hide secondary texts."""
        self._show_secondary_text = show
        return self

    def set_wrap_around(self, wrap_around: bool) -> List:
        """Whether navigating past either end wraps to the other."""
        self._wrap_around = wrap_around
        return self

    def set_changed_func(self, handler: Optional[ItemCallback]) -> List:
        """Call handler(index, main, secondary, shortcut) when the selection moves."""
        self._changed = handler
        return self

    def set_selected_func(self, handler: Optional[ItemCallback]) -> List:
        """Call handler(index, main, secondary, shortcut) when an item is chosen."""
        self._selected = handler
        return self

    def set_done_func(self, handler: Optional[Callable[[], None]]) -> List:
        """Call handler when Escape is pressed."""
        self._done = handler
        return self

    def add_item(self, main_text: str, secondary_text: str, shortcut: str,
                 selected: Optional[Callable[[], None]]) -> List:
        """Append an item. An empty shortcut means none."""
        return self.insert_item(-1, main_text, secondary_text, shortcut, selected)

    def insert_item(self, index: int, main_text: str, secondary_text: str,
                    shortcut: str, selected: Optional[Callable[[], None]]) -> List:
        """Insert an item before ``index``; -1 appends, out-of-range values are clamped."""
        item = _ListItem(main_text, secondary_text, shortcut, selected)
        if index < 0:
            index = len(self._items) + index + 1
        index = min(max(index, 0), len(self._items))
        if len(self._items) > self._current_item >= index:
            self._current_item += 1
        self._items.insert(index, item)
        if len(self._items) == 1:
            self._fire_changed(0)
        return self

    def __len__(self) -> int:
        return len(self._items)

    def get_item_text(self, index: int) -> tuple[str, str]:
        """Return (main, secondary) text of an item."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"list item {index} out of range")
        item = self._items[index]
        return item.main_text, item.secondary_text

    def set_item_text(self, index: int, main: str, secondary: str) -> List:
        """Replace an item's texts."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"list item {index} out of range")
        item = self._items[index]
        item.main_text = main
        item.secondary_text = secondary
        return self

    def find_items(self, main_search: str, secondary_search: str,
                   must_contain_both: bool, ignore_case: bool) -> list[int]:
        """Return ascending indices of items whose texts contain the search strings."""
        if not main_search and not secondary_search:
            return []
        if ignore_case:
            main_search = main_search.lower()
            secondary_search = secondary_search.lower()
        found = []
        for index, item in enumerate(self._items):
            main_text, secondary_text = item.main_text, item.secondary_text
            if ignore_case:
                main_text, secondary_text = main_text.lower(), secondary_text.lower()
            main_hit = main_search in main_text
            secondary_hit = secondary_search in secondary_text
            if must_contain_both:
                match = main_hit and secondary_hit
            else:
                match = (bool(main_text) and main_hit) or (bool(secondary_text) and secondary_hit)
            if match:
                found.append(index)
        return found

    def clear(self) -> List:
        """Remove all items."""
        self._items = []
        self._current_item = 0
        return self

    def draw(self, screen: Screen) -> None:
        super().draw(screen)

        x, y, width, height = self.get_inner_rect()
        _, total_height = screen.size()
        bottom_limit = min(y + height, total_height)

        show_shortcuts = any(item.shortcut for item in self._items)
        if show_shortcuts:
            x += 4
            width -= 4

        if self._current_item < self._item_offset:
            self._item_offset = self._current_item
        elif self._show_secondary_text:
            if 2 * (self._current_item - self._item_offset) >= height - 1:
                self._item_offset = (2 * self._current_item + 3 - height) // 2
        elif self._current_item - self._item_offset >= height:
            self._item_offset = self._current_item + 1 - height
        if self._horizontal_offset < 0:
            self._horizontal_offset = 0

        max_width = 0
        overflowing = False
        for index, item in enumerate(self._items):
            if index < self._item_offset:
                continue
            if y >= bottom_limit:
                break

            if show_shortcuts and item.shortcut:
                print_text(screen, f"({item.shortcut})", x - 5, y, 4, Align.RIGHT,
                           self._shortcut_color)

            printed, end = _print_row(screen, item.main_text, x, y, self._horizontal_offset,
                                      width, self._main_text_color)
            max_width = max(max_width, printed)
            if end < len(item.main_text):
                overflowing = True

            if index == self._current_item and (not self._selected_focus_only
                                                or self.has_focus()):
                text_width = width
                if not self._highlight_full_line:
                    text_width = min(text_width, string_width(item.main_text))
                for bx in range(text_width):
                    ch, style = screen.get_content(x + bx, y)
                    fg = style.fg
                    if fg == self._main_text_color:
                        fg = self._selected_text_color
                    screen.set_content(x + bx, y, ch,
                                       Style(fg=fg, bg=self._selected_background_color))

            y += 1
            if y >= bottom_limit:
                break

            if self._show_secondary_text:
                printed, end = _print_row(screen, item.secondary_text, x, y,
                                          self._horizontal_offset, width,
                                          self._secondary_text_color)
                max_width = max(max_width, printed)
                if end < len(item.secondary_text):
                    overflowing = True
                y += 1

        if self._horizontal_offset > 0 and max_width < width:
            self._horizontal_offset -= width - max_width
            self.draw(screen)
        self._overflowing = overflowing

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None:
        key = event.key
        if key is Key.ESCAPE:
            if self._done is not None:
                self._done()
            return
        if not self._items:
            return

        previous = self._current_item
        if key in (Key.TAB, Key.DOWN):
            self._current_item += 1
        elif key in (Key.BACKTAB, Key.UP):
            self._current_item -= 1
        elif key is Key.RIGHT:
            if self._overflowing:
                self._horizontal_offset += 2  # Two cells for wide characters.
            else:
                self._current_item += 1
        elif key is Key.LEFT:
            if self._horizontal_offset > 0:
                self._horizontal_offset -= 2
            else:
                self._current_item -= 1
        elif key is Key.HOME:
            self._current_item = 0
        elif key is Key.END:
            self._current_item = len(self._items) - 1
        elif key is Key.PGDN:
            self._current_item = min(self._current_item + self.get_inner_rect()[3],
                                     len(self._items) - 1)
        elif key is Key.PGUP:
            self._current_item = max(self._current_item - self.get_inner_rect()[3], 0)
        elif key is Key.ENTER:
            if 0 <= self._current_item < len(self._items):
                self._fire_selected(self._current_item)
        elif key is Key.RUNE:
            chosen = True
            if event.ch != " ":
                match = next((index for index, item in enumerate(self._items)
                              if item.shortcut and item.shortcut == event.ch), None)
                if match is None:
                    chosen = False
                else:
                    self._current_item = match
            if chosen:
                self._fire_selected(self._current_item)

        if self._current_item < 0:
            self._current_item = len(self._items) - 1 if self._wrap_around else 0
        elif self._current_item >= len(self._items):
            self._current_item = 0 if self._wrap_around else len(self._items) - 1

        if self._current_item != previous:
            self._fire_changed(self._current_item)

    def _index_at_point(self, x: int, y: int) -> int:
        rect_x, rect_y, width, height = self.get_inner_rect()
        if rect_x < 0 or width <= 0 or y < rect_y or y >= rect_y + height:
            return -1
        index = y - rect_y
        if self._show_secondary_text:
            index //= 2
        index += self._item_offset
        if index >= len(self._items):
            return -1
        return index

    def handle_mouse(self, action: MouseAction, event: MouseEvent,
                     set_focus: SetFocus) -> tuple[bool, Optional[Primitive]]:
        if not self.in_rect(*event.position()):
            return False, None

        if action is MouseAction.LEFT_CLICK:
            set_focus(self)
            index = self._index_at_point(*event.position())
            if index != -1:
                self._fire_selected(index)
                if index != self._current_item:
                    self._fire_changed(index)
                self._current_item = index
            return True, None
        if action is MouseAction.SCROLL_UP:
            if self._item_offset > 0:
                self._item_offset -= 1
            return True, None
        if action is MouseAction.SCROLL_DOWN:
            lines = len(self._items) - self._item_offset
            if self._show_secondary_text:
                lines *= 2
            if lines > self.get_inner_rect()[3]:
                self._item_offset += 1
            return True, None
        return False, None