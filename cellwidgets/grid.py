"""A grid layout that places widgets into rows and columns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .primitive import (
    Key,
    KeyEvent,
    MouseAction,
    MouseEvent,
    Primitive,
    Screen,
    SetFocus,
    Style,
)
from .semigraphics import (
    LIGHT_DOWN_AND_LEFT,
    LIGHT_DOWN_AND_RIGHT,
    LIGHT_HORIZONTAL,
    LIGHT_UP_AND_LEFT,
    LIGHT_UP_AND_RIGHT,
    LIGHT_VERTICAL,
    print_joined_semigraphics,
)
from .styles import STYLES, Color

_MAX_OFFSET = 2**31 - 1


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


@dataclass(eq=False)
class _GridItem:
    item: Optional[Primitive]
    row: int
    column: int
    width: int
    height: int
    min_grid_width: int
    min_grid_height: int
    focus: bool
    visible: bool = False
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


class Grid(Primitive):
    """Places widgets on a grid of rows and columns of fixed or relative size.

    When the grid is larger than its area, the row and column offsets scroll
    it; with the grid itself focused, arrow keys and g/G/j/k/h/l move them.
    The background is not cleared, so uncovered cells keep what was there.
    """

    def __init__(self):
        super().__init__()
        self._items: list[_GridItem] = []
        self._rows: list[int] = []
        self._columns: list[int] = []
        self._min_width = 0
        self._min_height = 0
        self._gap_rows = 0
        self._gap_columns = 0
        self._row_offset = 0
        self._column_offset = 0
        self._borders = False
        self._borders_color: Color = STYLES.graphics_color
        self.clear_background = False

    def set_columns(self, *args: int) -> Grid:
        """Define column widths: positive is absolute, zero or negative relative."""
        self._columns = list(args)
        return self

    def set_rows(self, *args: int) -> Grid:
        """Define row heights, with the same meaning as the column values."""
        self._rows = list(args)
        return self

    def set_size(self, num_rows: int, num_columns: int, row_size: int,
                 column_size: int) -> Grid:
        """Set all rows and all columns to the same size value."""
        self._rows = [row_size] * num_rows
        self._columns = [column_size] * num_columns
        return self

    def set_min_size(self, row: int, column: int) -> Grid:
        """Set the minimum row height and column width."""
        if row < 0 or column < 0:
            raise ValueError("Invalid minimum row/column size")
        self._min_height, self._min_width = row, column
        return self

    def set_gap(self, row: int, column: int) -> Grid:
        """Set the gaps between neighbouring rows and columns."""
        if row < 0 or column < 0:
            raise ValueError("Invalid gap size")
        self._gap_rows, self._gap_columns = row, column
        return self

    def set_borders(self, borders: bool) -> Grid:
        """Draw borders around items; gaps are then taken to be 1."""
        self._borders = borders
        return self

    def set_borders_color(self, color: Color) -> Grid:
        """Set the colour of item borders."""
        self._borders_color = color
        return self

    def add_item(self, p: Optional[Primitive], row: int, column: int, row_span: int,
                 col_span: int, min_grid_height: int, min_grid_width: int,
                 focus: bool) -> Grid:
        """Place a widget at a cell spanning rows and columns.

        The same widget may be added several times; the placement whose
        minimum grid size fits and is highest is used.
        """
        self._items.append(_GridItem(
            item=p, row=row, column=column, width=col_span, height=row_span,
            min_grid_width=min_grid_width, min_grid_height=min_grid_height,
            focus=focus,
        ))
        return self

    def remove_item(self, p: Optional[Primitive]) -> Grid:
        """Remove every placement of the given widget."""
        self._items = [entry for entry in self._items if entry.item is not p]
        return self

    def clear(self) -> Grid:
        """Remove all items."""
        self._items = []
        return self

    def set_offset(self, rows: int, columns: int) -> Grid:
        """Set how many rows and columns are skipped at the top left."""
        self._row_offset, self._column_offset = rows, columns
        return self

    def get_offset(self) -> tuple[int, int]:
        """Return (row offset, column offset)."""
        return self._row_offset, self._column_offset

    def focus(self, delegate: Optional[SetFocus]) -> None:
        for entry in self._items:
            if entry.focus and entry.item is not None:
                delegate(entry.item)
                return
        super().focus(delegate)

    def has_focus(self) -> bool:
        for entry in self._items:
            if entry.visible and entry.item is not None and entry.item.has_focus():
                return True
        return super().has_focus()

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None:
        if not self._has_focus:
            for entry in self._items:
                if entry.item is not None and entry.item.has_focus():
                    entry.item.handle_key(event, set_focus)
                    return
            return

        key = event.key
        if key is Key.RUNE:
            ch = event.ch
            if ch == "g":
                self._row_offset, self._column_offset = 0, 0
            elif ch == "G":
                self._row_offset = _MAX_OFFSET
            elif ch == "j":
                self._row_offset += 1
            elif ch == "k":
                self._row_offset -= 1
            elif ch == "h":
                self._column_offset -= 1
            elif ch == "l":
                self._column_offset += 1
        elif key is Key.HOME:
            self._row_offset, self._column_offset = 0, 0
        elif key is Key.END:
            self._row_offset = _MAX_OFFSET
        elif key is Key.UP:
            self._row_offset -= 1
        elif key is Key.DOWN:
            self._row_offset += 1
        elif key is Key.LEFT:
            self._column_offset -= 1
        elif key is Key.RIGHT:
            self._column_offset += 1

    def _distribute(self, definitions: list[int], count: int, available: int,
                    minimum: int, spacing: int) -> list[int]:
        """Return the sizes of ``count`` rows or columns."""
        sizes = [0] * count
        remaining = available
        proportional = 0
        for index, value in enumerate(definitions):
            if value > 0:
                value = max(value, minimum)
                remaining -= value
                sizes[index] = value
            elif value == 0:
                proportional += 1
            else:
                proportional += -value
        remaining -= spacing
        if count > len(definitions):
            proportional += count - len(definitions)

        for index in range(count):
            value = definitions[index] if index < len(definitions) else 0
            if value > 0:
                continue
            weight = 1 if value == 0 else -value
            absolute = _div(weight * remaining, proportional)
            remaining -= absolute
            proportional -= weight
            sizes[index] = max(absolute, minimum)
        return sizes

    @staticmethod
    def _positions(sizes: list[int], start: int, gap: int) -> list[int]:
        positions = []
        pos = start
        for size in sizes:
            positions.append(pos)
            pos += size + gap
        return positions

    def draw(self, screen: Screen) -> None:
        super().draw(screen)
        x, y, width, height = self.get_inner_rect()
        screen_width, screen_height = screen.size()

        # Select which placement applies for each widget.
        chosen: dict[int, _GridItem] = {}
        for entry in self._items:
            entry.visible = False
            if (entry.width <= 0 or entry.height <= 0
                    or width < entry.min_grid_width or height < entry.min_grid_height):
                continue
            key = id(entry.item)
            previous = chosen.get(key)
            if (previous is not None
                    and entry.min_grid_width < previous.min_grid_width
                    and entry.min_grid_height < previous.min_grid_height):
                continue
            chosen[key] = entry
        items = list(chosen.values())

        rows = max([len(self._rows)] + [e.row + e.height for e in items])
        columns = max([len(self._columns)] + [e.column + e.width for e in items])
        if rows == 0 or columns == 0:
            return

        if self._borders:
            row_spacing, column_spacing = rows + 1, columns + 1
        else:
            row_spacing = (rows - 1) * self._gap_rows
            column_spacing = (columns - 1) * self._gap_columns
        row_height = self._distribute(self._rows, rows, height, self._min_height, row_spacing)
        column_width = self._distribute(self._columns, columns, width, self._min_width,
                                        column_spacing)

        start = 1 if self._borders else 0
        row_gap = 1 if self._borders else self._gap_rows
        column_gap = 1 if self._borders else self._gap_columns
        row_pos = self._positions(row_height, start, row_gap)
        column_pos = self._positions(column_width, start, column_gap)

        # Item positions relative to the grid origin.
        focus: Optional[_GridItem] = None
        for entry in items:
            pw = sum(column_width[entry.column:entry.column + entry.width])
            ph = sum(row_height[entry.row:entry.row + entry.height])
            if self._borders:
                pw += entry.width - 1
                ph += entry.height - 1
            else:
                pw += (entry.width - 1) * self._gap_columns
                ph += (entry.height - 1) * self._gap_rows
            entry.x, entry.y = column_pos[entry.column], row_pos[entry.row]
            entry.w, entry.h = pw, ph
            entry.visible = True
            if entry.item is not None and entry.item.has_focus():
                focus = entry

        # Screen offsets.
        offset_y = sum(h + row_gap for h in row_height[:max(self._row_offset, 0)])
        offset_x = sum(w + column_gap for w in column_width[:max(self._column_offset, 0)])

        border = 1 if self._borders else 0
        if row_pos[-1] + row_height[-1] + border - offset_y < height:
            offset_y = row_pos[-1] - height + row_height[-1] + border
        if column_pos[-1] + column_width[-1] + border - offset_x < width:
            offset_x = column_pos[-1] - width + column_width[-1] + border

        if focus is not None:
            if focus.y + focus.h - offset_y >= height:
                offset_y = focus.y - height + focus.h
            if focus.y - offset_y < 0:
                offset_y = focus.y
            if focus.x + focus.w - offset_x >= width:
                offset_x = focus.x - width + focus.w
            if focus.x - offset_x < 0:
                offset_x = focus.x

        self._row_offset = self._clamp_offset(self._row_offset, row_pos, offset_y, height)
        self._column_offset = self._clamp_offset(self._column_offset, column_pos,
                                                 offset_x, width)

        border_style = Style(fg=self._borders_color, bg=self.background_color)
        focused_primitive: Optional[Primitive] = None
        for entry in items:
            entry.x -= offset_x
            entry.y -= offset_y
            if (entry.x >= width or entry.x + entry.w <= 0
                    or entry.y >= height or entry.y + entry.h <= 0):
                entry.visible = False
                continue
            if entry.x + entry.w > width:
                entry.w = width - entry.x
            if entry.y + entry.h > height:
                entry.h = height - entry.y
            if entry.x < 0:
                entry.w += entry.x
                entry.x = 0
            if entry.y < 0:
                entry.h += entry.y
                entry.y = 0
            if entry.w <= 0 or entry.h <= 0:
                entry.visible = False
                continue
            entry.x += x
            entry.y += y

            if entry.item is not None:
                entry.item.set_rect(entry.x, entry.y, entry.w, entry.h)
                if entry is focus:
                    focused_primitive = entry.item
                else:
                    entry.item.draw(screen)

            if self._borders:
                self._draw_border(screen, entry, border_style, screen_width, screen_height)

        if focused_primitive is not None:
            focused_primitive.draw(screen)

    @staticmethod
    def _clamp_offset(offset: int, positions: list[int], shift: int, extent: int) -> int:
        low, high = 0, 0
        for index, pos in enumerate(positions):
            if pos - shift < 0:
                low = index + 1
            if pos - shift < extent:
                high = index
        if offset < low:
            offset = low
        if offset > high:
            offset = high
        return offset

    @staticmethod
    def _draw_border(screen: Screen, entry: _GridItem, style: Style,
                     screen_width: int, screen_height: int) -> None:
        def put(bx: int, by: int, ch: str) -> None:
            if 0 <= bx < screen_width and 0 <= by < screen_height:
                print_joined_semigraphics(screen, bx, by, ch, style)

        left, top = entry.x - 1, entry.y - 1
        right, bottom = entry.x + entry.w, entry.y + entry.h
        for bx in range(entry.x, right):
            put(bx, top, LIGHT_HORIZONTAL)
            put(bx, bottom, LIGHT_HORIZONTAL)
        for by in range(entry.y, bottom):
            put(left, by, LIGHT_VERTICAL)
            put(right, by, LIGHT_VERTICAL)
        put(left, top, LIGHT_DOWN_AND_RIGHT)
        put(right, top, LIGHT_DOWN_AND_LEFT)
        put(left, bottom, LIGHT_UP_AND_RIGHT)
        put(right, bottom, LIGHT_UP_AND_LEFT)

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