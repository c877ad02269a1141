"""Wheel themes (YAML palettes)."""

from .base import Theme, ThemeColors, load_theme, list_themes

__all__ = ["Theme", "ThemeColors", "load_theme", "list_themes"]
