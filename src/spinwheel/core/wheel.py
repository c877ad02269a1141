"""Wheel application state.

``WheelApp`` is the explicit state object the host owns: the item
registry, the persisted options, the spin engine and the last result.
The UI layer only translates input into the command methods below and
core events (tick / settled / win / draw) into sound and pixels.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional
import logging
import random

from spinwheel.animation.easing import Easing
from spinwheel.core.colors import ColorStrategy
from spinwheel.core.events import Event, EventBus, EventType
from spinwheel.core.items import Item, ItemRegistry, coerce_positive
from spinwheel.core.options import MAX_SPIN_DURATION, WheelOptions
from spinwheel.core.resolver import resolve
from spinwheel.core.segments import Segment, build_segments
from spinwheel.core.spin import (
    MIN_ROTATIONS,
    ROTATIONS_PER_SECOND,
    TICK_THRESHOLD,
    SpinEngine,
    SpinEvent,
    SpinEventType,
)
from spinwheel.storage.record import deserialize, serialize

if TYPE_CHECKING:
    from spinwheel.config.settings import Settings
    from spinwheel.storage.presets import PresetStore

logger = logging.getLogger(__name__)

DEFAULT_ITEM_NAMES = ("Tacos", "Burger", "Pizza")


@dataclass(frozen=True)
class DrawRequest:
    """Everything the presentation layer needs for one frame."""
    segments: tuple[Segment, ...]
    rotation: float
    theme: str
    background: str
    is_spinning: bool = False
    winner: Optional[Segment] = None


@dataclass(frozen=True)
class WinResult:
    """Outcome of a settled spin."""
    segment: Segment
    rotation: float
    item: Optional[Item] = None  # None if the item was deleted mid-spin

    @property
    def name(self) -> str:
        return self.segment.display_name


class WheelApp:
    """Weighted lottery wheel.

    Lifecycle:
        1. Construct (optionally ``load_record`` a saved state)
        2. Command methods mutate items / options, ``request_spin`` starts a spin
        3. Host calls ``advance(delta_ms)`` once per frame
        4. ``close()`` on shutdown
    """

    def __init__(
        self,
        options: Optional[WheelOptions] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        easing: Easing | str = Easing.EASE_OUT_CUBIC,
        min_rotations: int = MIN_ROTATIONS,
        rotations_per_second: float = ROTATIONS_PER_SECOND,
        tick_threshold: float = TICK_THRESHOLD,
        color_strategy: ColorStrategy = ColorStrategy.HEX,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self.options = options or WheelOptions()
        self.event_bus = event_bus or EventBus()
        self.items = ItemRegistry(color_strategy=color_strategy, rng=self._rng)
        self.engine = SpinEngine(
            rng=self._rng,
            easing=easing,
            min_rotations=min_rotations,
            rotations_per_second=rotations_per_second,
            tick_threshold=tick_threshold,
        )
        self._on_error = on_error

        self._segments: tuple[Segment, ...] = ()
        self._segments_key: Optional[tuple[int, bool]] = None
        self._last_result: Optional[WinResult] = None

        logger.info("WheelApp initialized")

    @classmethod
    def from_settings(cls, settings: "Settings", **kwargs: Any) -> "WheelApp":
        """Build an app from environment settings."""
        spin = settings.spin
        rng = random.Random(spin.seed) if spin.seed is not None else None
        options = WheelOptions(spin_duration_seconds=spin.default_duration_seconds)
        return cls(
            options=kwargs.pop("options", options),
            rng=kwargs.pop("rng", rng),
            easing=spin.easing,
            min_rotations=spin.min_rotations,
            rotations_per_second=spin.rotations_per_second,
            tick_threshold=spin.tick_threshold,
            color_strategy=settings.color_strategy,
            **kwargs,
        )

    # ===== STATE =====

    @property
    def segments(self) -> tuple[Segment, ...]:
        """Current segment sequence, rebuilt after any item or shuffle change."""
        key = (self.items.revision, self.options.is_shuffled)
        if key != self._segments_key:
            self._segments = tuple(
                build_segments(self.items.snapshot(), interleaved=self.options.is_shuffled)
            )
            self._segments_key = key
        return self._segments

    @property
    def rotation(self) -> float:
        return self.engine.rotation

    @property
    def is_spinning(self) -> bool:
        return self.engine.is_spinning

    @property
    def last_result(self) -> Optional[WinResult]:
        return self._last_result

    def draw_request(self) -> DrawRequest:
        return DrawRequest(
            segments=self.segments,
            rotation=self.rotation,
            theme=self.options.theme_name,
            background=self.options.app_background,
            is_spinning=self.is_spinning,
            winner=self._last_result.segment if self._last_result else None,
        )

    # ===== ITEM COMMANDS =====

    def add_item(self, **fields: Any) -> Item:
        """Append an item (defaults: weight 1, split count 1, random color)."""
        item = self.items.add(**fields)
        self._items_changed()
        return item

    def add_default_items(self) -> None:
        """Seed an empty wheel with the starter items."""
        for name in DEFAULT_ITEM_NAMES:
            self.items.add(name=name)
        self._items_changed()

    def update_field(self, item_id: str, field: str, value: Any) -> bool:
        """Edit one item attribute; invalid numbers are clamped to 1."""
        changed = self.items.update(item_id, field, value)
        if changed:
            self._items_changed()
        return changed

    def delete_item(self, item_id: str) -> bool:
        removed = self.items.remove(item_id)
        if removed:
            self._items_changed()
        return removed

    # ===== OPTION COMMANDS =====

    def set_shuffled(self, shuffled: bool) -> None:
        """Toggle interleaved segment layout."""
        self.options.is_shuffled = bool(shuffled)
        self._options_changed()

    def set_spin_duration(self, seconds: Any) -> bool:
        """Set the spin length, clamped to (0, MAX_SPIN_DURATION] seconds."""
        value = coerce_positive(seconds)
        if value is None:
            return False
        self.options.spin_duration_seconds = min(value, MAX_SPIN_DURATION)
        self._options_changed()
        return True

    def set_light_mode(self, light: bool) -> None:
        self.options.is_light_mode = bool(light)
        self._options_changed()

    def set_background(self, color: str) -> None:
        self.options.app_background = color
        self._options_changed()

    # ===== SPIN =====

    def request_spin(self) -> bool:
        """Start a spin. No-op while spinning or when the wheel is empty."""
        started = self.engine.request_spin(self.segments, self.options.spin_duration_seconds)
        if started:
            self._last_result = None
            session = self.engine.session
            self.event_bus.emit(Event(EventType.SPIN_STARTED, data={
                "start_rotation": session.start_rotation,
                "target_rotation": session.target_rotation,
                "duration_ms": session.duration_ms,
            }))
        return started

    def advance(self, delta_ms: float) -> list[SpinEvent]:
        """Advance the spin by one frame and notify collaborators.

        Args:
            delta_ms: Time since the previous frame in milliseconds

        Returns:
            The spin events produced by this frame
        """
        events = self.engine.advance(delta_ms)

        for spin_event in events:
            if spin_event.type == SpinEventType.TICK:
                self.event_bus.emit(Event(EventType.TICK, data={"rotation": spin_event.rotation}))
            elif spin_event.type == SpinEventType.SETTLED:
                self._settle(spin_event.rotation)

        self._draw()
        return events

    def _settle(self, rotation: float) -> None:
        self.event_bus.emit(Event(EventType.SETTLED, data={"rotation": rotation}))

        # Resolved against the segments as they are now, which may differ
        # from the ones shown when the spin started.
        winner = resolve(rotation, self.segments)
        if winner is None:
            logger.info("Spin settled without a winner")
            return

        self._last_result = WinResult(
            segment=winner,
            rotation=rotation,
            item=self.items.get(winner.source_item_id),
        )
        logger.info(f"Winner: {winner.display_name}")
        self.event_bus.emit(Event(EventType.WIN, data={
            "item_id": winner.source_item_id,
            "name": winner.display_name,
            "segment": winner,
            "rotation": rotation,
        }))

    def reset(self) -> None:
        """Force IDLE and clear the shown result; rotation is kept."""
        self.engine.reset()
        self._last_result = None
        self.event_bus.emit(Event(EventType.RESET))
        self._draw()

    # ===== PERSISTENCE =====

    def serialize(self) -> dict[str, Any]:
        """Record of the current items and options."""
        return serialize(self.items.snapshot(), self.options)

    def load_record(self, record: Any) -> bool:
        """Replace items and options from a saved record.

        ``None`` (nothing saved yet) seeds the default items. A malformed
        record leaves an empty wheel with default options, reports the
        failure through an ERROR event and returns False.
        """
        if record is None:
            self.items.clear()
            self.options = WheelOptions()
            self.add_default_items()
            self._options_changed()
            return True

        loaded = deserialize(record, on_error=self._report_error)
        self.items.replace_all(loaded.items)
        self.options = loaded.options
        self._items_changed()
        self._options_changed()
        return loaded.ok

    def save_preset(self, presets: "PresetStore", name: str) -> bool:
        """Store the current wheel as a named preset (overwrites)."""
        return presets.save(name, self.serialize())

    def load_preset(self, presets: "PresetStore", name: str) -> bool:
        """Switch to a named preset. Unknown names leave the wheel untouched."""
        record = presets.load(name)
        if record is None:
            return False
        return self.load_record(record)

    def _report_error(self, error: Exception) -> None:
        self.event_bus.emit(Event(EventType.ERROR, data={"error": str(error)}, source="storage"))
        if self._on_error is not None:
            self._on_error(error)

    def close(self) -> None:
        """Stop any spin and drop event history."""
        self.engine.reset()
        self.event_bus.clear_history()
        logger.info("WheelApp closed")

    # ===== NOTIFICATIONS =====

    def _items_changed(self) -> None:
        self.event_bus.emit(Event(EventType.ITEMS_CHANGED, data={"count": len(self.items)}))
        self._draw()

    def _options_changed(self) -> None:
        self.event_bus.emit(Event(EventType.OPTIONS_CHANGED))
        self._draw()

    def _draw(self) -> None:
        self.event_bus.emit(Event(EventType.DRAW, data={"request": self.draw_request()}))
