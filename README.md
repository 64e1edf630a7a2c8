# cellwidgets

Layout containers and interactive widgets for character-cell screens.
Everything draws onto an in-memory `Screen` grid of cells, so widgets can be
laid out, driven with key and mouse events, and inspected in code.

## Installation

```
pip install .
```

## Modules

- `cellwidgets.styles`: `Color` (terminal colours) and `Theme`; `STYLES` is
  the theme that new widgets take their default colours from.
- `cellwidgets.primitive`: `Screen` (cell grid with `size`, `get_content`,
  `set_content`, `show_cursor`, `row_text`), `Style`, `Key`, `Modifier`,
  `KeyEvent`, `MouseAction`, `MouseEvent`, `Align`, `string_width`,
  `print_text`, and `Primitive`, the base class with position, padding,
  background, optional border and focus handling.
- `cellwidgets.semigraphics`: box-drawing characters, the
  `SEMIGRAPHIC_JOINTS` table, `join_semigraphics` and
  `print_joined_semigraphics`, which merge overlapping light line characters
  (for example `─` over `│` becomes `┼`).
- `cellwidgets.flex`: `Flex`, which places items side by side
  (`FLEX_COLUMN`, the default) or stacked (`FLEX_ROW`), each with a fixed
  size or a proportion of the remaining space.
- `cellwidgets.frame`: `Frame`, which surrounds an optional widget with
  spacing and header/footer text lines.
- `cellwidgets.pages`: `Pages`, named widgets stacked on top of each other
  whose visibility and order can be changed.
- `cellwidgets.grid`: `Grid`, which places widgets into rows and columns of
  absolute or proportional size, with gaps or joined borders, minimum sizes,
  per-size placements and scrolling offsets (arrow keys, Home/End and
  `g`/`G`/`j`/`k`/`h`/`l` while the grid itself has focus).
- `cellwidgets.listbox`: `List`, rows of items with main and secondary
  texts, shortcuts, selection callbacks, wrap-around navigation, searching
  with `find_items`, and mouse clicks and scrolling.
- `cellwidgets.inputfield`: `InputField`, a one-line text entry with label,
  placeholder, masking, an acceptance function, change/done callbacks,
  word-wise movement and editing keys, and an autocomplete drop-down.
- `cellwidgets.form`: `Form`, which lays out items such as input and
  password fields from top to bottom or left to right and moves focus
  between them with Tab, Enter and Backtab. Any object that follows the
  `FormItem` protocol can be added with `add_form_item`.

## Example

```python
from cellwidgets.primitive import Screen, Align
from cellwidgets.flex import Flex
from cellwidgets.frame import Frame
from cellwidgets.listbox import List
from cellwidgets.styles import Color

menu = List()
menu.add_item("Open", "Open a file", "o", None)
menu.add_item("Quit", "Leave the program", "q", None)

frame = Frame(menu)
frame.add_text("Main menu", True, Align.CENTER, Color.WHITE)

layout = Flex()
layout.add_item(frame, 0, 1, True)

screen = Screen(40, 10)
layout.set_rect(0, 0, 40, 10)
layout.draw(screen)
print(screen.row_text(1))
```

Containers pass key events to whichever child has focus through
`handle_key(event, set_focus)` and mouse events through
`handle_mouse(action, event, set_focus)`, which returns
`(consumed, capturing_widget)`. Focus is handed on with `focus(delegate)`,
where `delegate` is called with the widget that should take it.

## What it does not do

- There is no terminal output or input: widgets draw only onto the
  in-memory `Screen`, and events must be built and passed in by the caller.
- There is no application object or event loop that reads events, tracks
  the focused widget or redraws the screen.
- `Form` holds one-line items only; it has no buttons, drop-downs or
  checkboxes. There is no modal dialog or multi-line text view.

## Running the tests

```
pip install .[test]
pytest
```