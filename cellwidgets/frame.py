"""A wrapper that adds space and header/footer text around a widget."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .primitive import (
    Align,
    KeyEvent,
    MouseAction,
    MouseEvent,
    Primitive,
    Screen,
    SetFocus,
    print_text,
)
from .styles import Color


@dataclass
class _FrameText:
    text: str
    header: bool
    align: Align
    color: Color


class Frame(Primitive):
    """Surrounds an optional widget with borders and lines of text."""

    def __init__(self, primitive: Optional[Primitive]):
        super().__init__()
        self._primitive = primitive
        self._text: list[_FrameText] = []
        self._top = self._bottom = self._header = self._footer = 1
        self._left = self._right = 1

    def add_text(self, text: str, header: bool, align: Align, color: Color) -> Frame:
        """Add a line to the header (top down) or the footer (bottom up)."""
        self._text.append(_FrameText(text, header, align, color))
        return self

    def clear(self) -> Frame:
        """Remove all text."""
        self._text = []
        return self

    def set_borders(self, top: int, bottom: int, header: int, footer: int,
                    left: int, right: int) -> Frame:
        """Set border widths and the spacing between text and the widget."""
        self._top, self._bottom = top, bottom
        self._header, self._footer = header, footer
        self._left, self._right = left, right
        return self

    def draw(self, screen: Screen) -> None:
        super().draw(screen)

        x, top, width, height = self.get_inner_rect()
        bottom = top + height - 1
        x += self._left
        top += self._top
        bottom -= self._bottom
        width -= self._left + self._right
        if width <= 0 or top >= bottom:
            return

        # top-left, top-center, top-right, bottom-left, bottom-center, bottom-right
        rows = [0] * 6
        top_max = top
        bottom_min = bottom
        for line in self._text:
            align = int(line.align)
            if line.header:
                y = top + rows[align]
                rows[align] += 1
                if y >= bottom_min:
                    continue
                top_max = max(top_max, y + 1)
            else:
                y = bottom - rows[3 + align]
                rows[3 + align] += 1
                if y <= top_max:
                    continue
                bottom_min = min(bottom_min, y - 1)
            print_text(screen, line.text, x, y, width, line.align, line.color)

        if self._primitive is not None:
            if top_max > top:
                top = top_max + self._header
            if bottom_min < bottom:
                bottom = bottom_min - self._footer
            if top > bottom:
                return
            self._primitive.set_rect(x, top, width, bottom + 1 - top)
            self._primitive.draw(screen)

    def focus(self, delegate: Optional[SetFocus]) -> None:
        if self._primitive is not None:
            delegate(self._primitive)
        else:
            super().focus(delegate)

    def has_focus(self) -> bool:
        if self._primitive is None:
            return super().has_focus()
        return self._primitive.has_focus()

    def handle_mouse(self, action: MouseAction, event: MouseEvent,
                     set_focus: SetFocus) -> tuple[bool, Optional[Primitive]]:
        if not self.in_rect(*event.position()):
            return False, None
        if self._primitive is not None:
            return self._primitive.handle_mouse(action, event, set_focus)
        return False, None

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None:
        if self._primitive is not None and self._primitive.has_focus():
            self._primitive.handle_key(event, set_focus)