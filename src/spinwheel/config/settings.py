"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Core objects never read these globally: the host builds a ``Settings``
(usually through ``get_settings``) and passes the parts it needs.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spinwheel.animation.easing import Easing
from spinwheel.core.colors import ColorStrategy


class SpinSettings(BaseSettings):
    """Spin animation tuning."""

    model_config = SettingsConfigDict(env_prefix="SPINWHEEL_SPIN_")

    default_duration_seconds: float = Field(default=6.0, gt=0, le=60)
    min_rotations: int = Field(default=5, ge=1)
    rotations_per_second: float = Field(default=2.0, ge=0)
    tick_threshold: float = Field(default=0.5, gt=0)  # radians
    easing: Easing = Easing.EASE_OUT_CUBIC
    seed: int | None = None  # fixed seed for reproducible spins


class DisplaySettings(BaseSettings):
    """Dev host window and wheel raster."""

    model_config = SettingsConfigDict(env_prefix="SPINWHEEL_DISPLAY_")

    wheel_size: int = 600
    fps: int = 60
    window_title: str = "Spin Wheel"


class AudioSettings(BaseSettings):
    """Tick / win sound settings."""

    model_config = SettingsConfigDict(env_prefix="SPINWHEEL_AUDIO_")

    enabled: bool = True
    volume: float = Field(default=0.8, ge=0.0, le=1.0)


class StorageSettings(BaseSettings):
    """Where wheel state is kept."""

    model_config = SettingsConfigDict(env_prefix="SPINWHEEL_STORAGE_")

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".spinwheel")
    state_key: str = "wheel_state"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SPINWHEEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    color_strategy: ColorStrategy = ColorStrategy.HEX

    # Paths
    themes_path: Path = Field(default_factory=lambda: Path(__file__).parent / "themes")

    # Nested settings
    spin: SpinSettings = Field(default_factory=SpinSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
