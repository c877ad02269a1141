"""Segment builder.

Expands wheel items into the flat, ordered sequence of angular slices
that is drawn and resolved. Segment i spans

    [2*pi * cum(i) / total, 2*pi * cum(i+1) / total)

measured on the unrotated wheel, where cum(i) is the summed slice
weight of the segments before it.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence
import math

from spinwheel.core.items import Item

TAU = 2 * math.pi


@dataclass(frozen=True)
class Segment:
    """One angular slice of the wheel, derived from an item."""

    source_item_id: str
    display_name: str
    fill_color: str
    text_color: str
    text_size: float
    slice_weight: float


@dataclass(frozen=True)
class SegmentSpan:
    """Angular extent of a segment on the unrotated wheel (radians)."""

    segment: Segment
    start: float
    end: float

    @property
    def mid(self) -> float:
        return (self.start + self.end) / 2

    @property
    def width(self) -> float:
        return self.end - self.start


def _segment_for(item: Item) -> Segment:
    return Segment(
        source_item_id=item.id,
        display_name=item.name,
        fill_color=item.color,
        text_color=item.text_color,
        text_size=item.text_size,
        slice_weight=item.weight / item.split_count,
    )


def build_segments(items: Iterable[Item], interleaved: bool = False) -> list[Segment]:
    """Expand items into segments.

    Sequential: each item's splits are emitted back to back, in
    registry order.

    Interleaved: round-robin passes over the items; pass k emits one
    segment for every item that still has splits left. Per-item total
    weight is the same either way, only the ordering differs.
    """
    items = list(items)

    if not interleaved:
        return [_segment_for(item) for item in items for _ in range(item.split_count)]

    segments = []
    passes = max((item.split_count for item in items), default=0)
    for k in range(passes):
        for item in items:
            if k < item.split_count:
                segments.append(_segment_for(item))
    return segments


def total_weight(segments: Sequence[Segment]) -> float:
    """Summed slice weight of a segment sequence (0 when empty)."""
    return sum(segment.slice_weight for segment in segments)


def segment_spans(segments: Sequence[Segment]) -> list[SegmentSpan]:
    """Lay segments out around the unrotated wheel, starting at angle 0."""
    total = total_weight(segments)
    if total <= 0:
        return []

    spans = []
    start = 0.0
    for segment in segments:
        width = segment.slice_weight / total * TAU
        spans.append(SegmentSpan(segment=segment, start=start, end=start + width))
        start += width
    return spans
