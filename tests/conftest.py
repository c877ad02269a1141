import random

import pytest

from spinwheel.core.events import EventBus
from spinwheel.core.items import Item
from spinwheel.core.wheel import WheelApp


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def event_bus():
    return EventBus(history_limit=10_000)


@pytest.fixture
def app(rng, event_bus):
    return WheelApp(rng=rng, event_bus=event_bus)


@pytest.fixture
def make_item():
    def _make(item_id, name=None, weight=1, split_count=1, color="#FF0000"):
        return Item(
            id=item_id,
            name=name or item_id,
            color=color,
            weight=weight,
            split_count=split_count,
        )
    return _make


def run_until_idle(app, step_ms=16, limit_ms=120_000):
    """Advance a spinning app frame by frame until it settles."""
    events = []
    elapsed = 0
    while app.is_spinning and elapsed < limit_ms:
        events.extend(app.advance(step_ms))
        elapsed += step_ms
    return events


@pytest.fixture
def spin_to_end():
    return run_until_idle
