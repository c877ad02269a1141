"""Persisted record format.

A record is a plain JSON-compatible dict::

    {
        "items": [{"id", "name", "color", "weight", "splitCount",
                   "textSize", "textColor"}, ...],
        "appBackground": "#0F172A",
        "isLightMode": false,
        "isShuffled": false,
        "spinDurationSeconds": 6
    }

Older saves stored a bare list of items; those load with default
options. The same shape is used for presets.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional
import json
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from spinwheel.core.items import (
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_SIZE,
    Item,
    coerce_positive,
    new_item_id,
)
from spinwheel.core.options import (
    DEFAULT_BACKGROUND,
    DEFAULT_SPIN_DURATION,
    MAX_SPIN_DURATION,
    WheelOptions,
)

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Any:
    """Numbers stored where text is expected (ids, names) become strings."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class ItemRecord(BaseModel):
    """One item as stored on disk."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=new_item_id)
    name: str = ""
    color: str = "#808080"
    weight: float = 1
    split_count: int = Field(default=1, alias="splitCount")
    text_size: float = Field(default=DEFAULT_TEXT_SIZE, alias="textSize")
    text_color: str = Field(default=DEFAULT_TEXT_COLOR, alias="textColor")

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> Any:
        if value is None or value == "":
            return new_item_id()
        return _as_text(value)

    @field_validator("name", "color", "text_color", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("weight", "text_size", mode="before")
    @classmethod
    def _positive(cls, value: Any) -> float:
        return coerce_positive(value) or 1

    @field_validator("split_count", mode="before")
    @classmethod
    def _positive_int(cls, value: Any) -> int:
        return coerce_positive(value, integer=True) or 1

    @classmethod
    def from_item(cls, item: Item) -> "ItemRecord":
        return cls(
            id=item.id,
            name=item.name,
            color=item.color,
            weight=item.weight,
            split_count=item.split_count,
            text_size=item.text_size,
            text_color=item.text_color,
        )

    def to_item(self) -> Item:
        return Item(
            id=self.id,
            name=self.name,
            color=self.color,
            weight=self.weight,
            split_count=self.split_count,
            text_size=self.text_size,
            text_color=self.text_color,
        )


class WheelRecord(BaseModel):
    """Items plus wheel options."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    items: list[ItemRecord] = Field(default_factory=list)
    app_background: str = Field(default=DEFAULT_BACKGROUND, alias="appBackground")
    is_light_mode: bool = Field(default=False, alias="isLightMode")
    is_shuffled: bool = Field(default=False, alias="isShuffled")
    spin_duration_seconds: float = Field(default=DEFAULT_SPIN_DURATION, alias="spinDurationSeconds")

    @field_validator("spin_duration_seconds", mode="before")
    @classmethod
    def _positive(cls, value: Any) -> float:
        return min(coerce_positive(value) or DEFAULT_SPIN_DURATION, MAX_SPIN_DURATION)


class RecordError(ValueError):
    """Raised by ``parse_record`` for records that cannot be loaded."""


@dataclass
class LoadedState:
    """Result of loading a record."""
    items: tuple[Item, ...] = ()
    options: WheelOptions = field(default_factory=WheelOptions)
    ok: bool = True
    error: Optional[str] = None


def serialize(items: Iterable[Item], options: WheelOptions) -> dict[str, Any]:
    """Build the persisted record for the given items and options."""
    record = WheelRecord(
        items=[ItemRecord.from_item(item) for item in items],
        app_background=options.app_background,
        is_light_mode=options.is_light_mode,
        is_shuffled=options.is_shuffled,
        spin_duration_seconds=options.spin_duration_seconds,
    )
    return record.model_dump(by_alias=True)


def parse_record(record: Any) -> LoadedState:
    """Strictly parse a record.

    Accepts the wrapped dict, a legacy bare item list, or either of
    those as a JSON string.

    Raises:
        RecordError: If the record is malformed
    """
    if isinstance(record, (str, bytes)):
        try:
            record = json.loads(record)
        except json.JSONDecodeError as e:
            raise RecordError(f"Record is not valid JSON: {e}") from e

    if isinstance(record, list):
        record = {"items": record}
    if not isinstance(record, dict):
        raise RecordError(f"Unsupported record type: {type(record).__name__}")

    try:
        parsed = WheelRecord.model_validate(record)
    except ValidationError as e:
        raise RecordError(f"Invalid record: {e.error_count()} error(s)") from e

    options = WheelOptions(
        app_background=parsed.app_background,
        is_light_mode=parsed.is_light_mode,
        is_shuffled=parsed.is_shuffled,
        spin_duration_seconds=parsed.spin_duration_seconds,
    )
    return LoadedState(items=tuple(r.to_item() for r in parsed.items), options=options)


def deserialize(
    record: Any,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> LoadedState:
    """Load a record, falling back to an empty wheel with default options.

    Never raises for bad data: the failure is logged, handed to
    ``on_error`` and reported through ``LoadedState.ok``.
    """
    if record is None:
        return LoadedState()

    try:
        return parse_record(record)
    except RecordError as e:
        logger.error(f"Failed to load wheel record, using defaults: {e}")
        if on_error is not None:
            try:
                on_error(e)
            except Exception as callback_error:
                logger.error(f"Error in load error callback: {callback_error}")
        return LoadedState(ok=False, error=str(e))
