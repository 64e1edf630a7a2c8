"""Screen model, input events, text printing and the base widget class."""

from __future__ import annotations

import unicodedata
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag, auto
from typing import Callable, Optional

from .styles import STYLES, Color


@dataclass(frozen=True)
class Style:
    """Foreground and background colour of a screen cell."""

    fg: Color = Color.DEFAULT
    bg: Color = Color.DEFAULT

    def foreground(self, color: Color) -> Style:
        """Return a copy with the given foreground colour."""
        return Style(fg=color, bg=self.bg)

    def background(self, color: Color) -> Style:
        """Return a copy with the given background colour."""
        return Style(fg=self.fg, bg=color)


class Screen:
    """An in-memory grid of cells that widgets draw onto."""

    def __init__(self, width: int, height: int):
        self._width = width
        self._height = height
        self._cells = [[(" ", Style()) for _ in range(width)] for _ in range(height)]
        self.cursor: Optional[tuple[int, int]] = None

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return self._width, self._height

    def get_content(self, x: int, y: int) -> tuple[str, Style]:
        """Return the character and style at a cell; ("", Style()) outside."""
        if not self._inside(x, y):
            return "", Style()
        return self._cells[y][x]

    def set_content(self, x: int, y: int, ch: str, style: Style) -> None:
        """Set a cell. Positions outside the screen are ignored."""
        if self._inside(x, y):
            self._cells[y][x] = (ch, style)

    def show_cursor(self, x: int, y: int) -> None:
        """Place the cursor."""
        self.cursor = (x, y)

    def row_text(self, y: int) -> str:
        """Return the characters of one row as a string."""
        if not 0 <= y < self._height:
            raise IndexError(f"row {y} outside screen of height {self._height}")
        return "".join(ch for ch, _ in self._cells[y])


class Key(Enum):
    """Keys that can be reported in a key event."""

    RUNE = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKTAB = auto()
    BACKSPACE = auto()
    BACKSPACE2 = auto()
    DELETE = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    HOME = auto()
    END = auto()
    PGUP = auto()
    PGDN = auto()
    CTRL_A = auto()
    CTRL_B = auto()
    CTRL_D = auto()
    CTRL_E = auto()
    CTRL_F = auto()
    CTRL_K = auto()
    CTRL_U = auto()
    CTRL_W = auto()


class Modifier(IntFlag):
    """Modifier keys held during a key event."""

    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    META = 8


@dataclass(frozen=True)
class KeyEvent:
    """A key press. For Key.RUNE, ``ch`` holds the typed character."""

    key: Key
    ch: str = ""
    modifiers: Modifier = Modifier.NONE


class MouseAction(Enum):
    """What the mouse did."""

    MOVE = auto()
    LEFT_DOWN = auto()
    LEFT_UP = auto()
    LEFT_CLICK = auto()
    LEFT_DOUBLE_CLICK = auto()
    MIDDLE_DOWN = auto()
    MIDDLE_UP = auto()
    MIDDLE_CLICK = auto()
    RIGHT_DOWN = auto()
    RIGHT_UP = auto()
    RIGHT_CLICK = auto()
    SCROLL_UP = auto()
    SCROLL_DOWN = auto()
    SCROLL_LEFT = auto()
    SCROLL_RIGHT = auto()


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event at a screen position."""

    x: int
    y: int

    def position(self) -> tuple[int, int]:
        """Return (x, y)."""
        return self.x, self.y


class Align(IntEnum):
    """Horizontal text alignment."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


def _char_width(ch: str) -> int:
    if unicodedata.combining(ch) or unicodedata.category(ch) in ("Mn", "Me", "Cf"):
        return 0
    if ch < " " or "\x7f" <= ch < "\xa0":
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


def _clusters(text: str) -> list[tuple[str, int]]:
    """Split text into (characters, screen width) groups of base plus marks."""
    clusters: list[tuple[str, int]] = []
    for ch in text:
        width = _char_width(ch)
        if width == 0 and clusters:
            previous, previous_width = clusters[-1]
            clusters[-1] = (previous + ch, previous_width)
        else:
            clusters.append((ch, width))
    return clusters


def string_width(text: str) -> int:
    """Return the number of screen cells the text occupies."""
    return sum(width for _, width in _clusters(text))


def print_text(screen: Screen, text: str, x: int, y: int, max_width: int,
               align: Align, color: Color) -> tuple[int, int]:
    """Print text in a row, keeping each cell's background.

    Text that is too wide is cut according to the alignment. Returns the
    number of characters and the number of cells printed.
    """
    if max_width <= 0:
        return 0, 0
    parts = deque(_clusters(text))
    total = sum(width for _, width in parts)

    if align == Align.RIGHT:
        while total > max_width:
            total -= parts.popleft()[1]
    elif align == Align.CENTER:
        excess = total - max_width
        dropped = 0
        while parts and dropped * 2 < excess:
            width = parts.popleft()[1]
            dropped += width
            total -= width
    while total > max_width:
        total -= parts.pop()[1]

    if align == Align.RIGHT:
        column = x + max_width - total
    elif align == Align.CENTER:
        column = x + (max_width - total) // 2
    else:
        column = x

    chars = 0
    for cluster, width in parts:
        if width == 0:
            continue
        _, existing = screen.get_content(column, y)
        style = Style(fg=color, bg=existing.bg)
        screen.set_content(column, y, cluster, style)
        for extra in range(1, width):
            screen.set_content(column + extra, y, "", style)
        column += width
        chars += len(cluster)
    return chars, total


_BORDER = ("\u250c", "\u2510", "\u2514", "\u2518", "\u2500", "\u2502")
_FOCUS_BORDER = ("\u2554", "\u2557", "\u255a", "\u255d", "\u2550", "\u2551")

SetFocus = Callable[["Primitive"], None]


class Primitive:
    """A rectangular widget with background, optional border and padding."""

    def __init__(self):
        self._x, self._y, self._width, self._height = 0, 0, 15, 10
        self._padding = (0, 0, 0, 0)  # top, bottom, left, right
        self._has_focus = False
        self.border = False
        self.border_color = STYLES.border_color
        self.background_color = STYLES.primitive_background_color
        self.clear_background = True

    def get_rect(self) -> tuple[int, int, int, int]:
        """Return (x, y, width, height)."""
        return self._x, self._y, self._width, self._height

    def set_rect(self, x: int, y: int, width: int, height: int) -> Primitive:
        """Set position and size."""
        self._x, self._y, self._width, self._height = x, y, width, height
        return self

    def get_inner_rect(self) -> tuple[int, int, int, int]:
        """Return the area inside border and padding."""
        x, y, width, height = self.get_rect()
        if self.border:
            x, y, width, height = x + 1, y + 1, width - 2, height - 2
        top, bottom, left, right = self._padding
        x, y = x + left, y + top
        width = max(width - left - right, 0)
        height = max(height - top - bottom, 0)
        return x, y, width, height

    def set_border_padding(self, top: int, bottom: int, left: int, right: int) -> Primitive:
        """Set the space between the border and the contents."""
        self._padding = (top, bottom, left, right)
        return self

    def set_background_color(self, color: Color) -> Primitive:
        """Set the background colour."""
        self.background_color = color
        return self

    def in_rect(self, x: int, y: int) -> bool:
        """Whether the position lies within this widget's rectangle."""
        rx, ry, width, height = self.get_rect()
        return rx <= x < rx + width and ry <= y < ry + height

    def draw(self, screen: Screen) -> None:
        """Fill the background and draw the border."""
        x, y, width, height = self.get_rect()
        if width <= 0 or height <= 0:
            return
        background = Style(bg=self.background_color)
        if self.clear_background:
            for row in range(y, y + height):
                for column in range(x, x + width):
                    screen.set_content(column, row, " ", background)
        if not self.border or width < 2 or height < 2:
            return
        top_left, top_right, bottom_left, bottom_right, horizontal, vertical = (
            _FOCUS_BORDER if self.has_focus() else _BORDER
        )
        style = background.foreground(self.border_color)
        right, bottom = x + width - 1, y + height - 1
        for column in range(x + 1, right):
            screen.set_content(column, y, horizontal, style)
            screen.set_content(column, bottom, horizontal, style)
        for row in range(y + 1, bottom):
            screen.set_content(x, row, vertical, style)
            screen.set_content(right, row, vertical, style)
        screen.set_content(x, y, top_left, style)
        screen.set_content(right, y, top_right, style)
        screen.set_content(x, bottom, bottom_left, style)
        screen.set_content(right, bottom, bottom_right, style)

    def focus(self, delegate: Optional[SetFocus]) -> None:
        """Take the focus; containers pass it on through ``delegate``."""
        self._has_focus = True

    def has_focus(self) -> bool:
        """Whether this widget, or one inside it, has focus."""
        return self._has_focus

    def blur(self) -> None:
        """Lose the focus."""
        self._has_focus = False

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None:
        """Process a key event while focused."""

    def handle_mouse(self, action: MouseAction, event: MouseEvent,
                     set_focus: SetFocus) -> tuple[bool, Optional[Primitive]]:
        """Process a mouse event; return (consumed, capturing widget)."""
        if action is MouseAction.LEFT_DOWN and self.in_rect(*event.position()):
            set_focus(self)
            return True, None
        return False, None