"""Wheel renderer (presentation adapter).

Turns a ``DrawRequest`` into a flat list of draw commands (fills,
strokes, text) and rasterizes them into a numpy RGB buffer. Splitting
the two keeps layout testable without looking at pixels and lets
another surface (pygame, SVG, a canvas bridge) replay the same
commands.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union
import logging
import math

from spinwheel.config.themes import Theme, load_theme
from spinwheel.core.colors import Color, parse_color
from spinwheel.core.resolver import POINTER_ANGLE
from spinwheel.core.segments import segment_spans
from spinwheel.core.wheel import DrawRequest
from spinwheel.graphics.primitives import (
    Buffer,
    Point,
    clear,
    draw_line,
    draw_text,
    fill_circle,
    fill_polygon,
    fill_wedge,
    new_buffer,
    polar_grid,
    stroke_circle,
    stroke_polygon,
    text_size,
)

logger = logging.getLogger(__name__)

MARGIN = 20
MAX_LABEL_CHARS = 14


@dataclass(frozen=True)
class Clear:
    color: Color


@dataclass(frozen=True)
class FillWedge:
    """Pie slice in screen angles (already rotated)."""
    start: float
    end: float
    color: Color


@dataclass(frozen=True)
class StrokeLine:
    start: Tuple[int, int]
    end: Tuple[int, int]
    color: Color
    width: int = 1


@dataclass(frozen=True)
class FillCircle:
    radius: float
    color: Color


@dataclass(frozen=True)
class StrokeCircle:
    radius: float
    color: Color
    width: int = 1


@dataclass(frozen=True)
class Text:
    """Text centered on ``center``."""
    text: str
    center: Tuple[int, int]
    color: Color
    scale: int = 1


@dataclass(frozen=True)
class Polygon:
    points: Tuple[Point, ...]
    fill: Color
    outline: Optional[Color] = None


DrawCommand = Union[Clear, FillWedge, StrokeLine, FillCircle, StrokeCircle, Text, Polygon]


class WheelRenderer:
    """Draws the wheel into a square numpy buffer.

    Args:
        size: Width and height of the raster in pixels
        themes_path: Directory with theme YAML files (package themes by default)
    """

    def __init__(self, size: int = 600, themes_path: Optional[Path] = None):
        self.size = size
        self.center = (size / 2, size / 2)
        self.radius = size / 2 - MARGIN
        self._themes_path = themes_path
        self._themes: dict[str, Theme] = {}
        self._grid = None

    def theme(self, name: str) -> Theme:
        if name not in self._themes:
            self._themes[name] = load_theme(name, self._themes_path)
        return self._themes[name]

    def build_commands(self, request: DrawRequest) -> list[DrawCommand]:
        """Layout for one frame. An empty wheel draws only the background."""
        theme = self.theme(request.theme)
        colors = theme.colors
        commands: list[DrawCommand] = [Clear(parse_color(request.background))]

        spans = segment_spans(request.segments)
        if not spans:
            return commands

        cx, cy = self.center
        radius = self.radius

        for span in spans:
            commands.append(FillWedge(
                start=request.rotation + span.start,
                end=request.rotation + span.end,
                color=parse_color(span.segment.fill_color),
            ))

        # Segment borders
        if len(spans) > 1:
            for span in spans:
                angle = request.rotation + span.start
                commands.append(StrokeLine(
                    start=(round(cx), round(cy)),
                    end=(round(cx + math.cos(angle) * radius), round(cy + math.sin(angle) * radius)),
                    color=colors.to_rgb("segment_border"),
                    width=max(1, theme.border_width - 1),
                ))

        # Labels
        for span in spans:
            angle = request.rotation + span.mid
            label_r = radius * theme.label_radius
            commands.append(Text(
                text=span.segment.display_name[:MAX_LABEL_CHARS],
                center=(round(cx + math.cos(angle) * label_r), round(cy + math.sin(angle) * label_r)),
                color=parse_color(span.segment.text_color),
                scale=max(1, round(span.segment.text_size / 8)),
            ))

        commands.append(StrokeCircle(radius, colors.to_rgb("wheel_border"), theme.border_width))
        commands.append(FillCircle(radius * 0.08, colors.to_rgb("hub")))
        commands.append(StrokeCircle(radius * 0.08, colors.to_rgb("hub_outline"), 2))
        commands.append(self._pointer(theme))

        if request.winner is not None and not request.is_spinning:
            commands.append(Text(
                text=request.winner.display_name[:MAX_LABEL_CHARS * 2],
                center=(round(cx), self.size - MARGIN // 2 - 4),
                color=colors.to_rgb("text"),
                scale=2,
            ))

        return commands

    def _pointer(self, theme: Theme) -> Polygon:
        """Triangle at the top of the wheel pointing at the rim."""
        cx, cy = self.center
        tip_r = self.radius - 12
        base_r = self.radius + MARGIN - 2
        half_width = 0.09
        tip = (cx + math.cos(POINTER_ANGLE) * tip_r, cy + math.sin(POINTER_ANGLE) * tip_r)
        left = (
            cx + math.cos(POINTER_ANGLE - half_width) * base_r,
            cy + math.sin(POINTER_ANGLE - half_width) * base_r,
        )
        right = (
            cx + math.cos(POINTER_ANGLE + half_width) * base_r,
            cy + math.sin(POINTER_ANGLE + half_width) * base_r,
        )
        return Polygon(
            points=(tip, left, right),
            fill=theme.colors.to_rgb("pointer"),
            outline=theme.colors.to_rgb("pointer_outline"),
        )

    def render(self, request: DrawRequest, buffer: Optional[Buffer] = None) -> Buffer:
        """Rasterize one frame. Allocates a buffer when none is given."""
        if buffer is None:
            buffer = new_buffer(self.size, self.size)
        if self._grid is None or self._grid[0].shape != buffer.shape[:2]:
            self._grid = polar_grid(buffer, *self.center)

        for command in self.build_commands(request):
            self._execute(buffer, command)
        return buffer

    def _execute(self, buffer: Buffer, command: DrawCommand) -> None:
        if isinstance(command, Clear):
            clear(buffer, command.color)
        elif isinstance(command, FillWedge):
            fill_wedge(buffer, self._grid, self.radius, command.start, command.end, command.color)
        elif isinstance(command, StrokeLine):
            draw_line(buffer, *command.start, *command.end, command.color, command.width)
        elif isinstance(command, FillCircle):
            fill_circle(buffer, self._grid, command.radius, command.color)
        elif isinstance(command, StrokeCircle):
            stroke_circle(buffer, self._grid, command.radius, command.color, command.width)
        elif isinstance(command, Text):
            w, h = text_size(command.text, command.scale)
            draw_text(
                buffer,
                command.text,
                command.center[0] - w // 2,
                command.center[1] - h // 2,
                command.color,
                scale=command.scale,
            )
        elif isinstance(command, Polygon):
            fill_polygon(buffer, command.points, command.fill)
            if command.outline is not None:
                stroke_polygon(buffer, command.points, command.outline)
        else:
            logger.warning(f"Unknown draw command: {command!r}")
