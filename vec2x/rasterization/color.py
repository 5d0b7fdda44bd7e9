"""
Background color parsing
"""
from typing import NamedTuple


class Color(NamedTuple):
    """8-bit RGBA color, not premultiplied"""
    r: int
    g: int
    b: int
    a: int = 255


TRANSPARENT = Color(0, 0, 0, 0)
WHITE = Color(255, 255, 255, 255)

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def parse_color(value: str) -> Color:
    """
    Parse a hex color string.

    Accepts '#RRGGBB' or '#RRGGBBAA'; leading '#' characters are optional.

    Raises:
        ValueError: on any other length or a non-hex digit
    """
    digits = value.lstrip("#")

    if len(digits) not in (6, 8) or not set(digits) <= _HEX_DIGITS:
        raise ValueError("Invalid color format (expected '#RRGGBB' or '#RRGGBBAA')")

    channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    return Color(*channels)
