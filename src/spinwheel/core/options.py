"""User-facing wheel options that are persisted alongside the items."""

from dataclasses import dataclass

DEFAULT_BACKGROUND = "#0F172A"
DEFAULT_SPIN_DURATION = 6
MAX_SPIN_DURATION = 60


@dataclass
class WheelOptions:
    """Persisted wheel settings.

    Attributes:
        app_background: Background color behind the wheel
        is_light_mode: Light theme instead of dark
        is_shuffled: Interleave split segments instead of grouping them
        spin_duration_seconds: Length of one spin animation
    """
    app_background: str = DEFAULT_BACKGROUND
    is_light_mode: bool = False
    is_shuffled: bool = False
    spin_duration_seconds: float = DEFAULT_SPIN_DURATION

    @property
    def theme_name(self) -> str:
        return "light" if self.is_light_mode else "dark"
