"""Box-drawing characters and joining of overlapping line graphics."""

from __future__ import annotations

HORIZONTAL_ELLIPSIS = "\u2026"

LIGHT_HORIZONTAL = "\u2500"
HEAVY_HORIZONTAL = "\u2501"
LIGHT_VERTICAL = "\u2502"
HEAVY_VERTICAL = "\u2503"
LIGHT_DOWN_AND_RIGHT = "\u250c"
LIGHT_DOWN_AND_LEFT = "\u2510"
LIGHT_UP_AND_RIGHT = "\u2514"
LIGHT_UP_AND_LEFT = "\u2518"
LIGHT_VERTICAL_AND_RIGHT = "\u251c"
LIGHT_VERTICAL_AND_LEFT = "\u2524"
LIGHT_DOWN_AND_HORIZONTAL = "\u252c"
LIGHT_UP_AND_HORIZONTAL = "\u2534"
LIGHT_VERTICAL_AND_HORIZONTAL = "\u253c"
DOUBLE_HORIZONTAL = "\u2550"
DOUBLE_VERTICAL = "\u2551"
DOUBLE_DOWN_AND_RIGHT = "\u2554"
DOUBLE_DOWN_AND_LEFT = "\u2557"
DOUBLE_UP_AND_RIGHT = "\u255a"
DOUBLE_UP_AND_LEFT = "\u255d"
LIGHT_ARC_DOWN_AND_RIGHT = "\u256d"
LIGHT_ARC_DOWN_AND_LEFT = "\u256e"
LIGHT_ARC_UP_AND_LEFT = "\u256f"
LIGHT_ARC_UP_AND_RIGHT = "\u2570"


def _build_joints() -> dict[tuple[str, str], str]:
    h, v = LIGHT_HORIZONTAL, LIGHT_VERTICAL
    dr, dl, ur, ul = LIGHT_DOWN_AND_RIGHT, LIGHT_DOWN_AND_LEFT, LIGHT_UP_AND_RIGHT, LIGHT_UP_AND_LEFT
    vr, vl = LIGHT_VERTICAL_AND_RIGHT, LIGHT_VERTICAL_AND_LEFT
    dh, uh, vh = LIGHT_DOWN_AND_HORIZONTAL, LIGHT_UP_AND_HORIZONTAL, LIGHT_VERTICAL_AND_HORIZONTAL
    entries = [
        (h, v, vh), (h, dr, dh), (h, dl, dh), (h, ur, uh), (h, ul, uh),
        (h, vr, vh), (h, vl, vh), (h, dh, dh), (h, uh, uh), (h, vh, vh),
        (v, dr, vr), (v, dl, vl), (v, ur, vr), (v, ul, vl), (v, vr, vr),
        (v, vl, vl), (v, dh, vh), (v, uh, vh), (v, vh, vh),
        (dr, dl, dh), (dr, ur, vr), (dr, ul, vh), (dr, vr, vr), (dr, vl, vh),
        (dr, dh, dh), (dr, uh, vh), (dr, vh, vh),
        (dl, ur, vh), (dl, ul, vl), (dl, vr, vh), (dl, vl, vl), (dl, dh, dh),
        (dl, uh, vh), (dl, vh, vh),
        (ur, ul, uh), (ur, vr, vr), (ur, vl, vh), (ur, dh, vh), (ur, uh, uh), (ur, vh, vh),
        (ul, vr, vh), (ul, vl, vl), (ul, dh, vh), (ul, uh, uh), (ul, vh, vh),
        (vr, vl, vh), (vr, dh, vh), (vr, uh, vh), (vr, vh, vh),
        (vl, dh, vh), (vl, uh, vh), (vl, vh, vh),
        (dh, uh, vh), (dh, vh, vh),
        (uh, vh, vh),
    ]
    return {tuple(sorted((a, b))): result for a, b, result in entries}


# Maps a pair of characters, lower code point first, to their joined form.
SEMIGRAPHIC_JOINTS: dict[tuple[str, str], str] = _build_joints()


def join_semigraphics(first: str, second: str) -> str:
    """Return the character for two overlapping graphics characters.

    Unknown pairs yield the character with the higher code point.
    """
    if first == second:
        return first
    low, high = sorted((first, second))
    return SEMIGRAPHIC_JOINTS.get((low, high), high)


def print_joined_semigraphics(screen, x: int, y: int, ch: str, style) -> None:
    """Print a graphics character, joining it with what is already there."""
    previous, _ = screen.get_content(x, y)
    screen.set_content(x, y, join_semigraphics(ch, previous), style)