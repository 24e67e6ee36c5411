"""
Cell colors: one random hue family per session, a different shade per cell.

Hue ranges (degrees) follow the usual color-wheel families. Red wraps around
0, so its range starts negative.
"""

import colorsys
import random
from typing import Optional, Tuple

HUE_RANGES = {
    "red": (-26, 18),
    "orange": (19, 46),
    "yellow": (47, 62),
    "green": (63, 178),
    "blue": (179, 257),
    "purple": (258, 282),
    "pink": (283, 334),
}

HUES = list(HUE_RANGES)

# Keep shades vivid enough to read as the family and bright enough for text
SATURATION_RANGE = (0.45, 1.0)
VALUE_RANGE = (0.55, 1.0)

DARK_TEXT = "#1e1033"
LIGHT_TEXT = "white"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color string to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB tuple to hex color string"""
    return f"#{r:02X}{g:02X}{b:02X}"


def _random_shade(hue: str, rng: random.Random) -> str:
    low, high = HUE_RANGES[hue]
    degrees = rng.uniform(low, high) % 360
    saturation = rng.uniform(*SATURATION_RANGE)
    value = rng.uniform(*VALUE_RANGE)
    r, g, b = colorsys.hsv_to_rgb(degrees / 360, saturation, value)
    return rgb_to_hex(round(r * 255), round(g * 255), round(b * 255))


def random_palette(
    count: int,
    hue: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> list[str]:
    """
    Generate `count` distinct hex colors from one hue family.

    Args:
        count: Number of colors (one per cell)
        hue: Family name from HUES; picked at random if None
        rng: Random source (a fresh random.Random if None)
    """
    if rng is None:
        rng = random.Random()
    if hue is None:
        hue = rng.choice(HUES)
    if hue not in HUE_RANGES:
        raise ValueError(f"Unknown hue {hue!r} (choose from: {', '.join(HUES)})")

    colors: list[str] = []
    seen = set()
    while len(colors) < count:
        color = _random_shade(hue, rng)
        if color not in seen:
            seen.add(color)
            colors.append(color)
    return colors


def relative_luminance(hex_color: str) -> float:
    """Perceived brightness 0..1 (ITU-R BT.709 weights on sRGB)"""
    r, g, b = hex_to_rgb(hex_color)
    return (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255


def text_color_for(bg_color: str) -> str:
    """Dark text on light backgrounds, white text on dark ones."""
    return DARK_TEXT if relative_luminance(bg_color) > 0.5 else LIGHT_TEXT
