"""Item registry for the wheel.

Holds the ordered list of wheel items. Items are immutable values; an
edit replaces the stored item with an updated copy so snapshots handed
out earlier never change under the caller.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, Optional
import logging
import math
import random
import uuid

from spinwheel.core.colors import ColorStrategy, random_color

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 1
DEFAULT_SPLIT_COUNT = 1
DEFAULT_TEXT_SIZE = 16
DEFAULT_TEXT_COLOR = "#FFFFFF"


@dataclass(frozen=True)
class Item:
    """One named, colored, weighted entry on the wheel."""

    id: str
    name: str
    color: str
    weight: float = DEFAULT_WEIGHT
    split_count: int = DEFAULT_SPLIT_COUNT
    text_size: float = DEFAULT_TEXT_SIZE
    text_color: str = DEFAULT_TEXT_COLOR


def new_item_id() -> str:
    """Generate a fresh opaque item id."""
    return uuid.uuid4().hex


def coerce_positive(value: Any, integer: bool = False) -> Optional[float]:
    """Coerce form input to a valid positive number.

    Values <= 0 are clamped to 1. Returns None when the value is not a
    number at all (the caller keeps the previous value).
    """
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    if integer:
        number = int(number)
    if number <= 0:
        return 1
    if integer or number.is_integer():
        return int(number)
    return number


class ItemRegistry:
    """Ordered collection of wheel items.

    Every structural mutation bumps ``revision`` so derived data
    (the segment sequence) knows it has to be rebuilt.
    """

    # Editable field -> (attribute, numeric kind)
    FIELDS = {
        "name": ("name", None),
        "color": ("color", None),
        "text_color": ("text_color", None),
        "weight": ("weight", "float"),
        "split_count": ("split_count", "int"),
        "text_size": ("text_size", "float"),
    }

    # Names used by the persisted record and UI layers
    FIELD_ALIASES = {
        "splitCount": "split_count",
        "textSize": "text_size",
        "textColor": "text_color",
    }

    def __init__(
        self,
        color_strategy: ColorStrategy = ColorStrategy.HEX,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._items: list[Item] = []
        self._revision = 0
        self.color_strategy = color_strategy
        self._rng = rng

    @property
    def revision(self) -> int:
        """Counter bumped on every mutation."""
        return self._revision

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(tuple(self._items))

    def _touch(self) -> None:
        self._revision += 1

    def add(
        self,
        name: Optional[str] = None,
        color: Optional[str] = None,
        weight: Any = DEFAULT_WEIGHT,
        split_count: Any = DEFAULT_SPLIT_COUNT,
        text_size: Any = DEFAULT_TEXT_SIZE,
        text_color: str = DEFAULT_TEXT_COLOR,
    ) -> Item:
        """Append a new item with a freshly generated id.

        Missing names become "Item N", missing colors are picked with
        the registry's color strategy. Invalid numbers fall back to the
        defaults instead of raising.
        """
        item = Item(
            id=new_item_id(),
            name=name if name is not None else f"Item {len(self._items) + 1}",
            color=color or random_color(self.color_strategy, self._rng),
            weight=coerce_positive(weight) or DEFAULT_WEIGHT,
            split_count=coerce_positive(split_count, integer=True) or DEFAULT_SPLIT_COUNT,
            text_size=coerce_positive(text_size) or DEFAULT_TEXT_SIZE,
            text_color=text_color,
        )
        self._items.append(item)
        self._touch()
        logger.debug(f"Item added: {item.name} ({item.id})")
        return item

    def remove(self, item_id: str) -> bool:
        """Remove an item by id. Unknown ids are a no-op."""
        for i, item in enumerate(self._items):
            if item.id == item_id:
                self._items.pop(i)
                self._touch()
                logger.debug(f"Item removed: {item.name} ({item_id})")
                return True
        return False

    def update(self, item_id: str, field: str, value: Any) -> bool:
        """Change one attribute of an item.

        Numeric fields <= 0 are clamped to 1. Returns False when the
        item or field is unknown or the value is not a number.
        """
        field = self.FIELD_ALIASES.get(field, field)
        if field not in self.FIELDS:
            logger.warning(f"Ignoring update of unknown field: {field}")
            return False

        index = self._index_of(item_id)
        if index is None:
            return False

        attr, kind = self.FIELDS[field]
        if kind is not None:
            value = coerce_positive(value, integer=(kind == "int"))
            if value is None:
                logger.debug(f"Ignoring non-numeric {field} for {item_id}")
                return False
        else:
            value = "" if value is None else str(value)

        self._items[index] = replace(self._items[index], **{attr: value})
        self._touch()
        return True

    def get(self, item_id: str) -> Optional[Item]:
        index = self._index_of(item_id)
        return None if index is None else self._items[index]

    def snapshot(self) -> tuple[Item, ...]:
        """Immutable copy of the ordered item list."""
        return tuple(self._items)

    def replace_all(self, items: Iterable[Item]) -> None:
        """Swap in a new item list (record load, preset load).

        Duplicate ids get a fresh id so lookups stay unambiguous.
        """
        seen: set[str] = set()
        loaded = []
        for item in items:
            if not item.id or item.id in seen:
                item = replace(item, id=new_item_id())
            seen.add(item.id)
            loaded.append(item)
        self._items = loaded
        self._touch()

    def clear(self) -> None:
        self._items = []
        self._touch()

    def _index_of(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None
