"""Color helpers for wheel items.

Random colors for new items, HSL to hex conversion, and parsing of
the color strings stored on items into RGB tuples for rendering.
"""

from enum import Enum
from typing import Optional, Tuple
import colorsys
import logging
import math
import random
import re

logger = logging.getLogger(__name__)

# Type alias
Color = Tuple[int, int, int]

FALLBACK_COLOR: Color = (128, 128, 128)

_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")
_HSL_RE = re.compile(
    r"^hsl\(\s*(-?\d*\.?\d+)\s*,\s*(\d*\.?\d+)%\s*,\s*(\d*\.?\d+)%\s*\)$",
    re.IGNORECASE,
)


class ColorStrategy(Enum):
    """How random colors are picked for new items."""

    HEX = "hex"  # Six random hex digits
    HSL = "hsl"  # Random hue at 70% saturation / 60% lightness


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert HSL (hue in degrees, s/l in percent) to #RRGGBB."""
    r, g, b = colorsys.hls_to_rgb(
        (hue % 360) / 360.0,
        max(0.0, min(100.0, lightness)) / 100.0,
        max(0.0, min(100.0, saturation)) / 100.0,
    )
    return "#{:02X}{:02X}{:02X}".format(round(r * 255), round(g * 255), round(b * 255))


def random_color(
    strategy: ColorStrategy = ColorStrategy.HEX,
    rng: Optional[random.Random] = None,
) -> str:
    """Pick a random #RRGGBB color using the given strategy."""
    rng = rng or random
    if strategy is ColorStrategy.HSL:
        return hsl_to_hex(rng.randrange(360), 70, 60)
    return "#" + "".join(rng.choice("0123456789ABCDEF") for _ in range(6))


def parse_color(value: str) -> Color:
    """Parse '#RGB', '#RRGGBB' or 'hsl(h, s%, l%)' into an RGB tuple.

    Unknown formats fall back to a neutral gray instead of raising.
    """
    text = (value or "").strip()

    if text.startswith("#"):
        hex_part = text[1:]
        if len(hex_part) == 3:
            hex_part = "".join(c * 2 for c in hex_part)
        if _HEX_RE.match(hex_part):
            return tuple(int(hex_part[i:i + 2], 16) for i in (0, 2, 4))

    match = _HSL_RE.match(text)
    if match:
        h, s, l = (float(g) for g in match.groups())
        if math.isfinite(h):
            return parse_color(hsl_to_hex(h, s, l))

    logger.debug(f"Unparsable color {value!r}, using fallback")
    return FALLBACK_COLOR
