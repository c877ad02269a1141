"""Outcome resolver.

Maps a settled rotation to the segment under the fixed pointer. The
pointer sits at 1.5*pi (top of the wheel, canvas convention: angles
grow clockwise from the positive x axis with y pointing down).
"""

from typing import Optional, Sequence
import logging
import math

from spinwheel.core.segments import Segment, total_weight

logger = logging.getLogger(__name__)

TAU = 2 * math.pi
POINTER_ANGLE = 1.5 * math.pi


def pointer_angle(rotation: float) -> float:
    """Angle on the unrotated wheel that sits under the pointer, in [0, 2*pi)."""
    norm = rotation % TAU
    angle = (POINTER_ANGLE - norm) % TAU
    # float modulo can round up to exactly TAU
    return 0.0 if angle >= TAU else angle


def segment_at_angle(angle_on_wheel: float, segments: Sequence[Segment]) -> Optional[Segment]:
    """Return the segment whose span contains ``angle_on_wheel``.

    Spans are half-open ``[start, start + width)``. Returns None for an
    empty sequence or an angle outside [0, 2*pi).
    """
    total = total_weight(segments)
    if total <= 0:
        return None
    if not 0 <= angle_on_wheel < TAU:
        logger.debug(f"No segment at angle {angle_on_wheel!r}")
        return None

    start = 0.0
    for segment in segments:
        width = segment.slice_weight / total * TAU
        if start <= angle_on_wheel < start + width:
            return segment
        start += width

    # Summed widths can fall just short of 2*pi; the gap belongs to the last span
    return segments[-1]


def resolve(rotation: float, segments: Sequence[Segment]) -> Optional[Segment]:
    """Winning segment for a settled rotation, or None when there is none."""
    return segment_at_angle(pointer_angle(rotation), segments)
