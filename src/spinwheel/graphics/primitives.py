"""Drawing primitives for the wheel raster.

All functions draw into an RGB numpy buffer of shape (height, width, 3).
Angles follow the canvas convention: radians clockwise from the
positive x axis, with y pointing down.
"""

from typing import Optional, Sequence, Tuple
import math

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]

TAU = 2 * math.pi


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate a buffer filled with ``color``."""
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def polar_grid(buffer: Buffer, cx: float, cy: float) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Per-pixel (radius, angle) around (cx, cy); angle in [0, 2*pi)."""
    h, w = buffer.shape[:2]
    ys, xs = np.mgrid[0:h, 0:w]
    dx = xs + 0.5 - cx
    dy = ys + 0.5 - cy
    return np.hypot(dx, dy), np.mod(np.arctan2(dy, dx), TAU)


def fill_wedge(
    buffer: Buffer,
    grid: Tuple[NDArray[np.float64], NDArray[np.float64]],
    radius: float,
    start: float,
    end: float,
    color: Color,
) -> None:
    """Fill the pie slice between ``start`` and ``end`` (radians, end > start).

    Args:
        buffer: Target numpy array (height, width, 3)
        grid: Result of ``polar_grid`` for the wheel center
        radius: Wheel radius in pixels
        start: Slice start angle (may be any real number)
        end: Slice end angle
        color: RGB color tuple
    """
    r, theta = grid
    width = end - start
    if width <= 0:
        return
    if width >= TAU:
        mask = r <= radius
    else:
        mask = (r <= radius) & (np.mod(theta - start, TAU) < width)
    buffer[mask] = color


def fill_circle(
    buffer: Buffer,
    grid: Tuple[NDArray[np.float64], NDArray[np.float64]],
    radius: float,
    color: Color,
) -> None:
    r, _ = grid
    buffer[r <= radius] = color


def stroke_circle(
    buffer: Buffer,
    grid: Tuple[NDArray[np.float64], NDArray[np.float64]],
    radius: float,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a ring centered on ``radius``."""
    r, _ = grid
    half = thickness / 2
    buffer[(r >= radius - half) & (r <= radius + half)] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
    """
    h, w = buffer.shape[:2]

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1

    while True:
        for tx in range(-thickness // 2, (thickness + 1) // 2):
            for ty in range(-thickness // 2, (thickness + 1) // 2):
                px, py = x + tx, y + ty
                if 0 <= px < w and 0 <= py < h:
                    buffer[py, px] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def fill_polygon(buffer: Buffer, points: Sequence[Point], color: Color) -> None:
    """Fill a convex polygon given in either winding order."""
    if len(points) < 3:
        return
    h, w = buffer.shape[:2]
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x0, x1 = max(0, int(min(xs))), min(w, int(math.ceil(max(xs))) + 1)
    y0, y1 = max(0, int(min(ys))), min(h, int(math.ceil(max(ys))) + 1)
    if x0 >= x1 or y0 >= y1:
        return

    py, px = np.mgrid[y0:y1, x0:x1]
    px = px + 0.5
    py = py + 0.5

    inside_pos = np.ones(px.shape, dtype=bool)
    inside_neg = np.ones(px.shape, dtype=bool)
    for (ax, ay), (bx, by) in zip(points, list(points[1:]) + [points[0]]):
        cross = (bx - ax) * (py - ay) - (by - ay) * (px - ax)
        inside_pos &= cross >= 0
        inside_neg &= cross <= 0

    region = buffer[y0:y1, x0:x1]
    region[inside_pos | inside_neg] = color


def stroke_polygon(buffer: Buffer, points: Sequence[Point], color: Color, thickness: int = 1) -> None:
    for (ax, ay), (bx, by) in zip(points, list(points[1:]) + [points[0]]):
        draw_line(buffer, round(ax), round(ay), round(bx), round(by), color, thickness)


def text_size(text: str, scale: int = 1, font: Optional[dict] = None) -> Tuple[int, int]:
    """Width and height in pixels ``draw_text`` would use for ``text``."""
    if font is None:
        font = _get_default_font()
    width = 0
    for char in text:
        glyph = font.get(char.upper(), font.get('?', []))
        if char == ' ' or not glyph:
            width += 4 * scale
        else:
            width += (len(glyph[0]) + 1) * scale
    return max(0, width - scale), 5 * scale


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    font: Optional[dict] = None,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text using a bitmap font.

    Args:
        buffer: Target numpy array (height, width, 3)
        text: Text string to draw
        x: Starting x coordinate
        y: Starting y coordinate
        color: RGB color tuple
        font: Bitmap font dictionary (char -> 2D array). Uses built-in if None.
        scale: Scale factor for font size

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    if font is None:
        font = _get_default_font()

    h, w = buffer.shape[:2]
    cursor_x = x

    for char in text:
        if char == ' ':
            cursor_x += 4 * scale
            continue

        char_data = font.get(char.upper(), font.get('?', []))
        if not char_data:
            cursor_x += 4 * scale
            continue

        for row_idx, row in enumerate(char_data):
            for col_idx, pixel in enumerate(row):
                if not pixel:
                    continue
                px0 = cursor_x + col_idx * scale
                py0 = y + row_idx * scale
                xa, xb = max(0, px0), min(w, px0 + scale)
                ya, yb = max(0, py0), min(h, py0 + scale)
                if xa < xb and ya < yb:
                    buffer[ya:yb, xa:xb] = color

        cursor_x += (len(char_data[0]) + 1) * scale

    return cursor_x - x, 5 * scale


def _get_default_font() -> dict:
    """Return a simple 3x5 bitmap font for basic characters."""
    return _FONT_3X5


# Each character is a list of rows, each row is a list of 0/1 pixels
_FONT_3X5 = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
    ',': [[0,0,0], [0,0,0], [0,0,0], [0,1,0], [1,0,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    '+': [[0,0,0], [0,1,0], [1,1,1], [0,1,0], [0,0,0]],
    '%': [[1,0,1], [0,0,1], [0,1,0], [1,0,0], [1,0,1]],
    '#': [[1,0,1], [1,1,1], [1,0,1], [1,1,1], [1,0,1]],
}
