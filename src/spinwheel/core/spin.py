"""Spin engine.

Owns the wheel rotation and animates it from the current angle to a
randomized target. The engine never reads a clock: the host calls
``advance(delta_ms)`` once per frame, which keeps it host-agnostic and
deterministic under a seeded random source.

States:
    IDLE: Wheel at rest, spin requests accepted
    SPINNING: Animation in progress, spin requests ignored
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence
import logging
import math
import random

from spinwheel.animation.easing import Easing, get_easing
from spinwheel.core.options import MAX_SPIN_DURATION
from spinwheel.core.segments import Segment

logger = logging.getLogger(__name__)

TAU = 2 * math.pi

MIN_ROTATIONS = 5
ROTATIONS_PER_SECOND = 2
TICK_THRESHOLD = 0.5  # radians between audio ticks


class SpinState(Enum):
    """Spin engine states."""
    IDLE = auto()
    SPINNING = auto()


class SpinEventType(Enum):
    """Events produced while advancing a spin."""
    TICK = auto()
    SETTLED = auto()


@dataclass(frozen=True)
class SpinEvent:
    """Something that happened during one ``advance`` call."""
    type: SpinEventType
    rotation: float


@dataclass
class SpinSession:
    """Transient state of one spin, alive only while spinning."""
    start_rotation: float
    target_rotation: float
    duration_ms: float
    elapsed_ms: float = 0.0
    last_tick_rotation: float = 0.0

    @property
    def progress(self) -> float:
        return progress_at(self.elapsed_ms, self.duration_ms)


def progress_at(elapsed_ms: float, duration_ms: float) -> float:
    """Linear time progress, clamped to [0, 1]."""
    if duration_ms <= 0:
        return 1.0
    return max(0.0, min(elapsed_ms / duration_ms, 1.0))


def rotation_count(
    duration_seconds: float,
    min_rotations: int = MIN_ROTATIONS,
    rotations_per_second: float = ROTATIONS_PER_SECOND,
) -> int:
    """Whole turns for a spin: at least ``min_rotations``, more for longer spins."""
    return max(min_rotations, int(duration_seconds * rotations_per_second))


class SpinEngine:
    """Drives the wheel rotation through IDLE -> SPINNING -> IDLE.

    Only the landing offset is random; given that offset the rotation
    at every elapsed time is fully determined by the easing curve and
    the duration.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        easing: Easing | str = Easing.EASE_OUT_CUBIC,
        min_rotations: int = MIN_ROTATIONS,
        rotations_per_second: float = ROTATIONS_PER_SECOND,
        tick_threshold: float = TICK_THRESHOLD,
        rotation: float = 0.0,
    ) -> None:
        self._rng = rng or random.Random()
        self._ease = get_easing(easing)
        self.min_rotations = min_rotations
        self.rotations_per_second = rotations_per_second
        self.tick_threshold = tick_threshold

        self._state = SpinState.IDLE
        self._rotation = rotation
        self._session: Optional[SpinSession] = None

    @property
    def state(self) -> SpinState:
        return self._state

    @property
    def is_spinning(self) -> bool:
        return self._state == SpinState.SPINNING

    @property
    def rotation(self) -> float:
        """Cumulative rotation in radians since the session started."""
        return self._rotation

    @property
    def session(self) -> Optional[SpinSession]:
        return self._session

    def request_spin(self, segments: Sequence[Segment], duration_seconds: float) -> bool:
        """Start a spin toward a random target.

        Ignored (returns False) while already spinning or when there is
        nothing on the wheel. The duration is clamped to
        [0, MAX_SPIN_DURATION] seconds.
        """
        if self.is_spinning:
            logger.debug("Spin request ignored: already spinning")
            return False
        if not segments:
            logger.debug("Spin request ignored: wheel is empty")
            return False

        duration_seconds = max(0.0, min(duration_seconds, MAX_SPIN_DURATION))
        start = self._rotation
        offset = self._rng.random() * TAU
        turns = rotation_count(duration_seconds, self.min_rotations, self.rotations_per_second)

        self._session = SpinSession(
            start_rotation=start,
            target_rotation=start + turns * TAU + offset,
            duration_ms=duration_seconds * 1000,
            last_tick_rotation=start,
        )
        self._state = SpinState.SPINNING

        logger.info(
            f"Spin started: {turns} turns + {offset:.3f} rad over {duration_seconds}s"
        )
        return True

    def rotation_at(self, elapsed_ms: float) -> float:
        """Rotation the active spin has at ``elapsed_ms`` after its start."""
        session = self._session
        if session is None:
            return self._rotation
        eased = self._ease(progress_at(elapsed_ms, session.duration_ms))
        return session.start_rotation + (session.target_rotation - session.start_rotation) * eased

    def advance(self, delta_ms: float) -> list[SpinEvent]:
        """Advance the animation by one frame.

        Args:
            delta_ms: Time since the previous frame in milliseconds

        Returns:
            At most one TICK, when the rotation has moved more than
            ``tick_threshold`` past the last tick, followed by SETTLED on
            the frame the spin completes.
        """
        session = self._session
        if not self.is_spinning or session is None:
            return []

        session.elapsed_ms += max(0.0, delta_ms)
        progress = session.progress

        if progress >= 1.0:
            self._rotation = session.target_rotation
        else:
            self._rotation = self.rotation_at(session.elapsed_ms)

        events = []
        if self._rotation - session.last_tick_rotation > self.tick_threshold:
            session.last_tick_rotation = self._rotation
            events.append(SpinEvent(SpinEventType.TICK, self._rotation))

        if progress >= 1.0:
            self._state = SpinState.IDLE
            self._session = None
            events.append(SpinEvent(SpinEventType.SETTLED, self._rotation))
            logger.info(f"Spin settled at {self._rotation % TAU:.3f} rad")

        return events

    def reset(self) -> None:
        """Force the engine back to IDLE, keeping the current rotation."""
        if self._session is not None:
            logger.info("Spin reset")
        self._state = SpinState.IDLE
        self._session = None
