"""Easing curves for the spin animation.

Every curve maps normalized time t in [0, 1] to normalized progress,
is monotonically non-decreasing, and returns exactly 0 at t=0 and 1 at
t=1 so a spin always lands precisely on its target rotation.
"""

from enum import Enum
from typing import Callable
import math


class Easing(Enum):
    """Available spin deceleration curves."""

    LINEAR = "linear"
    EASE_OUT_QUAD = "ease_out_quad"
    EASE_OUT_CUBIC = "ease_out_cubic"
    EASE_OUT_QUART = "ease_out_quart"
    EASE_OUT_QUINT = "ease_out_quint"
    EASE_OUT_SINE = "ease_out_sine"
    EASE_OUT_EXPO = "ease_out_expo"
    EASE_OUT_CIRC = "ease_out_circ"


# Type alias for easing functions
EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_out_cubic(t: float) -> float:
    """Decelerate to zero velocity (cubic)."""
    return 1 - pow(1 - t, 3)


def ease_out_quart(t: float) -> float:
    """Decelerate to zero velocity (quartic)."""
    return 1 - pow(1 - t, 4)


def ease_out_quint(t: float) -> float:
    return 1 - pow(1 - t, 5)


def ease_out_sine(t: float) -> float:
    return math.sin((t * math.pi) / 2)


def ease_out_expo(t: float) -> float:
    """Exponential deceleration; pinned to 1 at the end."""
    return 1.0 if t >= 1 else 1 - pow(2, -10 * t)


def ease_out_circ(t: float) -> float:
    return math.sqrt(1 - pow(t - 1, 2))


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_OUT_QUART: ease_out_quart,
    Easing.EASE_OUT_QUINT: ease_out_quint,
    Easing.EASE_OUT_SINE: ease_out_sine,
    Easing.EASE_OUT_EXPO: ease_out_expo,
    Easing.EASE_OUT_CIRC: ease_out_circ,
}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or string name (e.g., "ease_out_cubic")

    Returns:
        The easing function

    Raises:
        ValueError: If easing name is not recognized
    """
    if isinstance(easing, str):
        easing = Easing(easing.lower())
    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")
    return func
