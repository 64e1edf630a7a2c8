"""A one-line text entry widget with optional masking and autocompletion."""

from __future__ import annotations

import re
import threading
from typing import Callable, Optional

from .listbox import List
from .primitive import (
    Key,
    KeyEvent,
    Modifier,
    MouseAction,
    MouseEvent,
    Primitive,
    Screen,
    SetFocus,
    Style,
    string_width,
)
from .styles import STYLES, Color

_UNLIMITED = 2**31 - 1
_LAST_WORD = re.compile(r"\S+\s*\Z", re.ASCII)
_FIRST_WORD = re.compile(r"\A\s*\S+\s*", re.ASCII)

KeyCallback = Callable[[Key], None]


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


def _put(screen: Screen, text: str, x: int, y: int, max_width: int, style: Style,
         keep_background: bool) -> int:
    """Print text left-aligned within max_width cells; return the printed width."""
    printed = 0
    for start, end, width in _clusters(text):
        if printed + width > max_width:
            break
        if width > 0:
            column = x + printed
            bg = screen.get_content(column, y)[1].bg if keep_background else style.bg
            cell = Style(fg=style.fg, bg=bg)
            screen.set_content(column, y, text[start:end], cell)
            for extra in range(1, width):
                screen.set_content(column + extra, y, "", cell)
        printed += width
    return printed


class InputField(Primitive):
    """A one-line area where the user enters text.

    Keys: Left/Right move by one character, Home/Ctrl-A/Alt-a and
    End/Ctrl-E/Alt-e jump to either end, Alt-Left/Alt-b and Alt-Right/Alt-f
    move by words, Backspace and Delete remove characters, Ctrl-K deletes to
    the end, Ctrl-W deletes the last word and Ctrl-U clears the line.
    """

    def __init__(self):
        super().__init__()
        self._text = ""
        self._label = ""
        self._placeholder = ""
        self._label_style = Style(fg=STYLES.secondary_text_color)
        self._field_style = Style(fg=STYLES.primary_text_color,
                                  bg=STYLES.contrast_background_color)
        self._placeholder_style = Style(fg=STYLES.contrast_secondary_text_color,
                                        bg=STYLES.contrast_background_color)
        self._label_width = 0
        self._field_width = 0
        self._mask_character = ""
        self._cursor_pos = 0
        self._autocomplete: Optional[Callable[[str], list[str]]] = None
        self._autocomplete_list: Optional[List] = None
        self._autocomplete_lock = threading.RLock()
        self._accept: Optional[Callable[[str, str], bool]] = None
        self._changed: Optional[Callable[[str], None]] = None
        self._done: Optional[KeyCallback] = None
        self._finished: Optional[KeyCallback] = None
        self._field_x = 0
        self._offset = 0

    def set_text(self, text: str) -> InputField:
        """Replace the text and move the cursor to its end."""
        self._text = text
        self._cursor_pos = len(text)
        if self._changed is not None:
            self._changed(text)
        return self

    def get_text(self) -> str:
        """Return the current text."""
        return self._text

    def set_label(self, label: str) -> InputField:
        """Set the text shown before the input area."""
        self._label = label
        return self

    def get_label(self) -> str:
        """Return the label."""
        return self._label

    def set_label_width(self, width: int) -> InputField:
        """Set the label's screen width; 0 uses the label's own width."""
        self._label_width = width
        return self

    def set_placeholder(self, text: str) -> InputField:
        """Set the text shown while the field is empty."""
        self._placeholder = text
        return self

    def set_label_color(self, color: Color) -> InputField:
        """Set the label's text colour."""
        self._label_style = self._label_style.foreground(color)
        return self

    def set_field_background_color(self, color: Color) -> InputField:
        """Set the background colour of the input area."""
        self._field_style = self._field_style.background(color)
        return self

    def set_field_text_color(self, color: Color) -> InputField:
        """Set the text colour of the input area."""
        self._field_style = self._field_style.foreground(color)
        return self

    def set_placeholder_text_color(self, color: Color) -> InputField:
        """Set the colour of the placeholder text."""
        self._placeholder_style = self._placeholder_style.foreground(color)
        return self

    def set_form_attributes(self, label_width: int, label_color: Color, bg_color: Color,
                            field_text_color: Color, field_bg_color: Color) -> InputField:
        """Set the attributes a form shares between its items."""
        self._label_width = label_width
        self.background_color = bg_color
        self.set_label_color(label_color)
        self.set_field_text_color(field_text_color)
        self.set_field_background_color(field_bg_color)
        return self

    def set_field_width(self, width: int) -> InputField:
        """Set the input area's width; 0 extends it as far as possible."""
        self._field_width = width
        return self

    def get_field_width(self) -> int:
        """Return the input area's width setting."""
        return self._field_width

    def set_mask_character(self, mask: str) -> InputField:
        """Show this character in place of each typed one; empty disables masking."""
        self._mask_character = mask
        return self

    def set_autocomplete_func(self, callback: Optional[Callable[[str], list[str]]]
                              ) -> InputField:
        """Set a function returning completion entries for the current text."""
        self._autocomplete = callback
        self.autocomplete()
        return self

    def autocomplete(self) -> InputField:
        """Ask the autocomplete function for entries and prepare the drop-down."""
        with self._autocomplete_lock:
            if self._autocomplete is None:
                return self
            entries = self._autocomplete(self._text)
            if not entries:
                self._autocomplete_list = None
                return self

            if self._autocomplete_list is None:
                entry_list = List()
                (entry_list.show_secondary_text(False)
                 .set_main_text_color(STYLES.primitive_background_color)
                 .set_selected_text_color(STYLES.primitive_background_color)
                 .set_selected_background_color(STYLES.primary_text_color)
                 .set_highlight_full_line(True)
                 .set_background_color(STYLES.more_contrast_background_color))
                self._autocomplete_list = entry_list

            current_entry = -1
            suffix_length = 9999
            self._autocomplete_list.clear()
            for index, entry in enumerate(entries):
                self._autocomplete_list.add_item(entry, "", "", None)
                if (entry.startswith(self._text)
                        and len(entry) - len(self._text) < suffix_length):
                    current_entry = index
                    suffix_length = len(self._text) - len(entry)

            if current_entry >= 0:
                self._autocomplete_list.set_current_item(current_entry)
        return self

    def set_acceptance_func(self, handler: Optional[Callable[[str, str], bool]]
                            ) -> InputField:
        """Set handler(new_text, last_char) that may reject a typed character."""
        self._accept = handler
        return self

    def set_changed_func(self, handler: Optional[Callable[[str], None]]) -> InputField:
        """Call handler with the new text whenever the text changes."""
        self._changed = handler
        return self

    def set_done_func(self, handler: Optional[KeyCallback]) -> InputField:
        """Call handler with Enter, Escape, Tab or Backtab when input ends."""
        self._done = handler
        return self

    def set_finished_func(self, handler: Optional[KeyCallback]) -> InputField:
        """Call handler when the user leaves this field (used by forms)."""
        self._finished = handler
        return self

    def draw(self, screen: Screen) -> None:
        super().draw(screen)

        x, y, width, height = self.get_inner_rect()
        right_limit = x + width
        if height < 1 or right_limit <= x:
            return

        keep_label_bg = self._label_style.bg is Color.DEFAULT
        if self._label_width > 0:
            label_width = min(self._label_width, right_limit - x)
            _put(screen, self._label, x, y, label_width, self._label_style, keep_label_bg)
            x += label_width
        else:
            x += _put(screen, self._label, x, y, right_limit - x, self._label_style,
                      keep_label_bg)

        self._field_x = x
        field_width = self._field_width or _UNLIMITED
        text = self._text
        placeholder = text == "" and self._placeholder != ""
        input_style = self._placeholder_style if placeholder else self._field_style
        field_width = min(field_width, right_limit - x)
        if input_style.bg is not Color.DEFAULT:
            for index in range(field_width):
                screen.set_content(x + index, y, " ", input_style)

        cursor_screen_pos = 0
        if placeholder:
            _put(screen, self._placeholder, x, y, field_width, self._placeholder_style, True)
            self._offset = 0
        else:
            if self._mask_character:
                text = self._mask_character * len(self._text)
            if field_width >= string_width(text):
                _put(screen, text, x, y, field_width, self._field_style, True)
                self._offset = 0
                for start, _, cluster_width in _clusters(text):
                    if start >= self._cursor_pos:
                        break
                    cursor_screen_pos += cluster_width
            else:
                self._cursor_pos = min(max(self._cursor_pos, 0), len(text))
                shift_left = 0
                if self._offset > self._cursor_pos:
                    self._offset = self._cursor_pos
                else:
                    sub_width = string_width(text[self._offset:self._cursor_pos])
                    if sub_width > field_width - 1:
                        shift_left = sub_width - field_width + 1
                current_offset = self._offset
                for start, end, cluster_width in _clusters(text):
                    if start < current_offset:
                        continue
                    if shift_left > 0:
                        self._offset = end
                        shift_left -= cluster_width
                    else:
                        if end > self._cursor_pos:
                            break
                        cursor_screen_pos += cluster_width
                _put(screen, text[self._offset:], x, y, field_width, self._field_style, True)

        with self._autocomplete_lock:
            if self._autocomplete_list is not None:
                entry_list = self._autocomplete_list
                list_height = len(entry_list)
                list_width = max((string_width(entry_list.get_item_text(index)[0])
                                  for index in range(list_height)), default=0)
                list_y = y + 1
                _, screen_height = screen.size()
                if list_y + list_height >= screen_height and list_y - 2 > list_height - list_y:
                    list_y = max(y - list_height, 0)
                if list_y + list_height >= screen_height:
                    list_height = screen_height - list_y
                entry_list.set_rect(x, list_y, list_width, list_height)
                entry_list.draw(screen)

        if self.has_focus():
            screen.show_cursor(x + cursor_screen_pos, y)

    def _move_left(self) -> None:
        clusters = _clusters(self._text[:self._cursor_pos])
        if clusters:
            start, end, _ = clusters[-1]
            self._cursor_pos -= end - start

    def _move_right(self) -> None:
        clusters = _clusters(self._text[self._cursor_pos:])
        if clusters:
            start, end, _ = clusters[0]
            self._cursor_pos += end - start

    def _move_word_left(self) -> None:
        self._cursor_pos = len(_LAST_WORD.sub("", self._text[:self._cursor_pos]))

    def _move_word_right(self) -> None:
        rest = _FIRST_WORD.sub("", self._text[self._cursor_pos:])
        self._cursor_pos = len(self._text) - len(rest)

    def _add(self, ch: str) -> bool:
        new_text = self._text[:self._cursor_pos] + ch + self._text[self._cursor_pos:]
        if self._accept is not None and not self._accept(new_text, ch):
            return False
        self._text = new_text
        self._cursor_pos += len(ch)
        return True

    def _autocomplete_select(self, offset: int) -> str:
        entry_list = self._autocomplete_list
        count = len(entry_list)
        new_entry = entry_list.get_current_item() + offset
        if new_entry >= count:
            new_entry = 0
        elif new_entry < 0:
            new_entry = count - 1
        entry_list.set_current_item(new_entry)
        text, _ = entry_list.get_item_text(new_entry)
        self.set_text(text)
        return text

    def _finish(self, key: Key) -> None:
        if self._done is not None:
            self._done(key)
        if self._finished is not None:
            self._finished(key)

    def _apply_key(self, event: KeyEvent) -> Optional[str]:
        """Process a key; return a new baseline text if a selection was applied."""
        key = event.key
        alt = bool(event.modifiers & Modifier.ALT)
        if key is Key.RUNE:
            if alt and event.ch == "a":
                self._cursor_pos = 0
            elif alt and event.ch == "e":
                self._cursor_pos = len(self._text)
            elif alt and event.ch == "b":
                self._move_word_left()
            elif alt and event.ch == "f":
                self._move_word_right()
            else:
                self._add(event.ch)
        elif key is Key.CTRL_U:
            self._text = ""
            self._cursor_pos = 0
        elif key is Key.CTRL_K:
            self._text = self._text[:self._cursor_pos]
        elif key is Key.CTRL_W:
            new_text = (_LAST_WORD.sub("", self._text[:self._cursor_pos])
                        + self._text[self._cursor_pos:])
            self._cursor_pos -= len(self._text) - len(new_text)
            self._text = new_text
        elif key in (Key.BACKSPACE, Key.BACKSPACE2):
            clusters = _clusters(self._text[:self._cursor_pos])
            if clusters:
                start, end, _ = clusters[-1]
                self._text = self._text[:start] + self._text[end:]
                self._cursor_pos -= end - start
            if self._offset >= self._cursor_pos:
                self._offset = 0
        elif key in (Key.DELETE, Key.CTRL_D):
            clusters = _clusters(self._text[self._cursor_pos:])
            if clusters:
                start, end, _ = clusters[0]
                cut = self._cursor_pos + end - start
                self._text = self._text[:self._cursor_pos] + self._text[cut:]
        elif key is Key.LEFT:
            if alt:
                self._move_word_left()
            else:
                self._move_left()
        elif key is Key.CTRL_B:
            self._move_left()
        elif key is Key.RIGHT:
            if alt:
                self._move_word_right()
            else:
                self._move_right()
        elif key is Key.CTRL_F:
            self._move_right()
        elif key in (Key.HOME, Key.CTRL_A):
            self._cursor_pos = 0
        elif key in (Key.END, Key.CTRL_E):
            self._cursor_pos = len(self._text)
        elif key is Key.ENTER:
            if self._autocomplete_list is not None:
                baseline = self._autocomplete_select(0)
                self._autocomplete_list = None
                return baseline
            self._finish(key)
        elif key is Key.ESCAPE:
            if self._autocomplete_list is not None:
                self._autocomplete_list = None
            else:
                self._finish(key)
        elif key is Key.TAB:
            if self._autocomplete_list is not None:
                return self._autocomplete_select(0)
            self._finish(key)
        elif key is Key.DOWN:
            if self._autocomplete_list is not None:
                return self._autocomplete_select(1)
            self._finish(key)
        elif key in (Key.UP, Key.BACKTAB):
            if self._autocomplete_list is not None:
                return self._autocomplete_select(-1)
            self._finish(key)
        return None

    def handle_key(self, event: KeyEvent, set_focus: SetFocus) -> None:
        baseline = self._text
        with self._autocomplete_lock:
            selected = self._apply_key(event)
        if selected is not None:
            baseline = selected
        if self._text != baseline:
            self.autocomplete()
            if self._changed is not None:
                self._changed(self._text)

    def handle_mouse(self, action: MouseAction, event: MouseEvent,
                     set_focus: SetFocus) -> tuple[bool, Optional[Primitive]]:
        x, y = event.position()
        _, rect_y, _, _ = self.get_inner_rect()
        if not self.in_rect(x, y):
            return False, None
        if action is MouseAction.LEFT_CLICK and y == rect_y:
            if x >= self._field_x:
                screen_pos = 0
                for start, _, width in _clusters(self._text[self._offset:]):
                    if x - self._field_x < screen_pos + width:
                        self._cursor_pos = start + self._offset
                        break
                    screen_pos += width
                else:
                    self._cursor_pos = len(self._text)
            set_focus(self)
            return True, None
        return False, None