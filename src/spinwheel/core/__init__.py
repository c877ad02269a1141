"""Core wheel engine: items, segments, spin and outcome resolution."""

from .items import Item, ItemRegistry
from .segments import Segment, build_segments, total_weight
from .spin import SpinEngine, SpinEvent, SpinEventType, SpinState
from .resolver import resolve, segment_at_angle
from .events import Event, EventBus, EventType
from .options import WheelOptions

__all__ = [
    "Item",
    "ItemRegistry",
    "Segment",
    "build_segments",
    "total_weight",
    "SpinEngine",
    "SpinEvent",
    "SpinEventType",
    "SpinState",
    "resolve",
    "segment_at_angle",
    "Event",
    "EventBus",
    "EventType",
    "WheelOptions",
]
