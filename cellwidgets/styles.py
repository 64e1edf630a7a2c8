"""Colours and the theme that widgets take their default colours from."""

from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """A terminal colour."""

    DEFAULT = "default"
    BLACK = "black"
    MAROON = "maroon"
    GREEN = "green"
    OLIVE = "olive"
    NAVY = "navy"
    PURPLE = "purple"
    TEAL = "teal"
    SILVER = "silver"
    GRAY = "gray"
    RED = "red"
    LIME = "lime"
    YELLOW = "yellow"
    BLUE = "blue"
    FUCHSIA = "fuchsia"
    AQUA = "aqua"
    WHITE = "white"
    DARK_BLUE = "darkblue"


@dataclass
class Theme:
    """The colours used when widgets are created."""

    primitive_background_color: Color = Color.BLACK
    contrast_background_color: Color = Color.BLUE
    more_contrast_background_color: Color = Color.GREEN
    border_color: Color = Color.WHITE
    title_color: Color = Color.WHITE
    graphics_color: Color = Color.WHITE
    primary_text_color: Color = Color.WHITE
    secondary_text_color: Color = Color.YELLOW
    tertiary_text_color: Color = Color.GREEN
    inverse_text_color: Color = Color.BLUE
    contrast_secondary_text_color: Color = Color.DARK_BLUE


# The theme in effect. Change its fields before creating widgets to restyle them.
STYLES = Theme()