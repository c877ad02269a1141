"""
Spin wheel audio - synthesized tick and win sounds.

Sounds are generated at startup from simple waveforms, so there are no
asset files to ship. When the mixer cannot be opened (no audio device,
headless CI) every play call is a silent no-op.
"""

import array
import logging
import math
import random
from typing import Callable, Dict, List, Optional

import pygame

from spinwheel.core.events import EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def noise() -> float:
    """White noise generator."""
    return random.random() * 2 - 1


class AudioEngine:
    """Tone generator for wheel ticks and the win fanfare."""

    def __init__(self, volume: float = 1.0):
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume = max(0.0, min(1.0, volume))
        self._muted = False

    @property
    def available(self) -> bool:
        """True when the mixer is open and sounds were generated."""
        return self._initialized

    def init(self) -> bool:
        """Open the mixer and generate sounds. Returns False if audio is unavailable."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            self._generate_all_sounds()
            self._initialized = True
            logger.info("Audio engine initialized")
            return True
        except Exception as e:
            logger.warning(f"Audio unavailable, sounds disabled: {e}")
            self._initialized = False
            return False

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate_all_sounds(self) -> None:
        self._sounds["tick"] = self._create_sound(tick_samples())
        self._sounds["win"] = self._create_sound(win_samples())

    # ===== PLAYBACK API =====

    def play(self, sound_name: str, volume: float = 1.0) -> Optional[pygame.mixer.Channel]:
        """Play a generated sound; dropped when audio is unavailable or muted."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        sound.set_volume(volume * self._volume)
        return sound.play()

    def play_tick(self) -> None:
        self.play("tick", volume=0.6)

    def play_win(self) -> None:
        self.play("win")

    def set_volume(self, volume: float) -> None:
        """Set volume (0.0 - 1.0)."""
        self._volume = max(0.0, min(1.0, volume))

    def get_volume(self) -> float:
        return self._volume

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        """Toggle mute state."""
        self._muted = not self._muted
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")


def tick_samples(duration: float = 0.025) -> array.array:
    """Short percussive click: a noise burst over a high square blip."""
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * duration)):
        t = i / SAMPLE_RATE
        env = max(0.0, 1 - t * 50)
        val = noise() * 0.12 + square(t, 1800) * 0.08
        samples.append(int(val * env * 32767))
    return samples


def win_samples(duration: float = 0.9) -> array.array:
    """Rising major arpeggio ending on a held chord."""
    samples = array.array('h')
    notes = [523, 659, 784, 1047]
    step = 0.09
    for i in range(int(SAMPLE_RATE * duration)):
        t = i / SAMPLE_RATE
        note_idx = int(t / step)
        if note_idx < len(notes):
            env = max(0.0, 1 - (t % step) * 8)
            val = square(t, notes[note_idx]) * 0.18 * env
        else:
            hold = t - step * len(notes)
            env = max(0.0, 1 - hold * 1.8)
            val = (sine(t, 523) + sine(t, 659) + sine(t, 784)) * 0.14 * env
        samples.append(int(max(-1.0, min(1.0, val)) * 32767))
    return samples


def attach_audio(event_bus: EventBus, engine: AudioEngine) -> Callable[[], None]:
    """Play ticks and the win sound for wheel events.

    Returns:
        Function that detaches the audio handlers again
    """
    unsubscribers: List[Callable[[], None]] = [
        event_bus.subscribe(EventType.TICK, lambda event: engine.play_tick()),
        event_bus.subscribe(EventType.WIN, lambda event: engine.play_win()),
    ]

    def detach() -> None:
        for unsubscribe in unsubscribers:
            unsubscribe()

    return detach
