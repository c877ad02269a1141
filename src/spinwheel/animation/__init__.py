"""Animation curves for spinwheel."""

from .easing import Easing, get_easing

__all__ = ["Easing", "get_easing"]
