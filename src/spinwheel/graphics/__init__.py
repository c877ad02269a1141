"""Graphics: wheel layout and numpy rasterization."""

from spinwheel.graphics.renderer import WheelRenderer, DrawCommand
from spinwheel.graphics.primitives import (
    new_buffer,
    clear,
    fill_wedge,
    draw_line,
    draw_text,
)

__all__ = [
    "WheelRenderer",
    "DrawCommand",
    "new_buffer",
    "clear",
    "fill_wedge",
    "draw_line",
    "draw_text",
]
