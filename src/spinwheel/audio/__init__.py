"""
Spin wheel audio - tick and win sounds.
"""

from .engine import AudioEngine, attach_audio

__all__ = ["AudioEngine", "attach_audio"]
