"""
Color literal parsing and rendering for #RRGGBB strings.
"""
import math
from typing import Tuple

from ..errors import InvalidColorLiteral

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def parse_color_literal(text: str) -> Tuple[int, int, int]:
    """
    Parse a ``#RRGGBB`` literal into 8-bit channel values.

    The leading ``#`` is optional and hex digits may be either case.

    Raises:
        InvalidColorLiteral: wrong length or non-hex content
    """
    if text.startswith("#"):
        text = text[1:]
    if len(text) != 6:
        raise InvalidColorLiteral("want #RRGGBB")

    channels = []
    for i in (0, 2, 4):
        pair = text[i:i + 2]
        # int() alone would also accept signs and whitespace
        if not all(ch in HEX_DIGITS for ch in pair):
            raise InvalidColorLiteral(f"invalid literal for base 16: {pair!r}")
        channels.append(int(pair, 16))
    return channels[0], channels[1], channels[2]


def round_half_away(x: float) -> float:
    """Round to the nearest integer, ties away from zero."""
    if x < 0:
        return -round_half_away(-x)
    floor = math.floor(x)
    return float(floor + 1 if x - floor >= 0.5 else floor)


def _channel_hex(c: float) -> str:
    v = int(round_half_away(c * 255))
    v = max(0, min(255, v))
    return f"{v:02x}"


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Render gamma-encoded channels in [0, 1] as a lowercase ``#rrggbb`` string.

    Out-of-range values are clamped after scaling to 0-255.
    """
    return "#" + _channel_hex(r) + _channel_hex(g) + _channel_hex(b)
