"""
Wheel theme class and theme loading utilities.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any
import logging

import yaml

from spinwheel.core.colors import Color, parse_color

logger = logging.getLogger(__name__)


@dataclass
class ThemeColors:
    """Theme color palette."""
    wheel_border: str = "#1E293B"    # Outer rim
    segment_border: str = "#0F172A"  # Lines between segments
    pointer: str = "#FACC15"         # Fixed pointer at the top
    pointer_outline: str = "#1E293B"
    hub: str = "#1E293B"             # Center cap
    hub_outline: str = "#F8FAFC"
    text: str = "#F8FAFC"            # Overlay text (winner banner)

    def to_rgb(self, color_name: str) -> Color:
        """Convert a named palette color to an RGB tuple."""
        return parse_color(getattr(self, color_name, self.text))


@dataclass
class Theme:
    """Complete wheel theme."""
    name: str = "dark"
    description: str = ""
    colors: ThemeColors = field(default_factory=ThemeColors)
    border_width: int = 3
    label_radius: float = 0.62  # Fraction of the wheel radius

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "Theme":
        """Create theme from YAML data. Unknown keys are ignored."""
        theme = cls(
            name=data.get("name", "dark"),
            description=data.get("description", ""),
            border_width=int(data.get("border_width", 3)),
            label_radius=float(data.get("label_radius", 0.62)),
        )

        if "colors" in data:
            known = {f.name for f in fields(ThemeColors)}
            theme.colors = ThemeColors(
                **{k: str(v) for k, v in data["colors"].items() if k in known}
            )

        return theme


def load_theme(theme_name: str, themes_path: Path | None = None) -> Theme:
    """
    Load a theme from YAML file.

    Args:
        theme_name: Name of the theme (without .yaml extension)
        themes_path: Path to themes directory

    Returns:
        Theme instance (the built-in default if the file is missing or broken)
    """
    if themes_path is None:
        themes_path = Path(__file__).parent

    theme_file = themes_path / f"{theme_name}.yaml"

    if not theme_file.exists():
        logger.warning(f"Theme not found: {theme_name}, using default")
        return Theme(name=theme_name)

    try:
        with open(theme_file, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load theme {theme_name}: {e}")
        return Theme(name=theme_name)

    return Theme.from_yaml(data)


def list_themes(themes_path: Path | None = None) -> list[str]:
    """List available themes."""
    if themes_path is None:
        themes_path = Path(__file__).parent

    return sorted(f.stem for f in themes_path.glob("*.yaml"))
