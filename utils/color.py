"""
utils/color.py — Color helpers for DotQuest.

Palette entries are stored as hex strings in settings.py and themes.py.
pygame wants RGB tuples, so everything passes through hex_to_rgb() once
at load time. lighter()/darker() shade buttons and the selected path.
"""

from typing import Tuple

RGBColor = Tuple[int, int, int]


def clamp(value: int, lo: int = 0, hi: int = 255) -> int:
    """Clamp an integer channel to [lo, hi]."""
    return max(lo, min(hi, value))


def hex_to_rgb(value: str) -> RGBColor:
    """Parse a "#RGB", "#RRGGBB" or "#AARRGGBB" string into an RGB tuple.

    The leading "#" is optional. Short form doubles each nibble
    ("#F80" → (255, 136, 0)). The alpha byte of the 8-digit form is
    dropped. Anything else parses as black, the way a blank swatch would.

    Args:
        value: Hex colour string.

    Returns:
        (r, g, b) tuple with channels in 0–255.
    """
    digits = value.strip().lstrip("#")
    try:
        number = int(digits, 16)
    except ValueError:
        return (0, 0, 0)

    if len(digits) == 3:
        return ((number >> 8) * 17, (number >> 4 & 0xF) * 17, (number & 0xF) * 17)
    if len(digits) == 6:
        return (number >> 16, number >> 8 & 0xFF, number & 0xFF)
    if len(digits) == 8:
        return (number >> 16 & 0xFF, number >> 8 & 0xFF, number & 0xFF)
    return (0, 0, 0)


def lighter(color: RGBColor, amount: int = 40) -> RGBColor:
    """Return color with every channel raised by amount, clamped at 255."""
    r, g, b = color
    return (clamp(r + amount), clamp(g + amount), clamp(b + amount))


def darker(color: RGBColor, amount: int = 40) -> RGBColor:
    """Return color with every channel lowered by amount, clamped at 0."""
    r, g, b = color
    return (clamp(r - amount), clamp(g - amount), clamp(b - amount))


def with_alpha(color: RGBColor, alpha: int) -> Tuple[int, int, int, int]:
    """Append an alpha channel, for drawing onto SRCALPHA surfaces."""
    return (color[0], color[1], color[2], clamp(alpha))
