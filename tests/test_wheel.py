import json
import math
import random

import pytest

from spinwheel.config.settings import Settings, SpinSettings
from spinwheel.core.events import EventType
from spinwheel.core.options import MAX_SPIN_DURATION
from spinwheel.core.resolver import resolve
from spinwheel.core.wheel import DEFAULT_ITEM_NAMES, WheelApp
from spinwheel.graphics.renderer import WheelRenderer
from spinwheel.storage.presets import PresetStore
from spinwheel.storage.store import MemoryStore

TAU = 2 * math.pi


def _types(event_bus):
    return [e.type for e in event_bus.get_history(limit=100_000)]


@pytest.fixture
def two_items(app):
    a = app.add_item(name="A", weight=1, color="#FF0000")
    b = app.add_item(name="B", weight=3, color="#0000FF")
    return a, b


def test_load_nothing_seeds_default_items(app):
    assert app.load_record(None)

    assert [i.name for i in app.items] == list(DEFAULT_ITEM_NAMES)
    assert [i.name for i in app.items] == ["Tacos", "Burger", "Pizza"]
    assert all(i.weight == 1 and i.split_count == 1 for i in app.items)
    assert app.options.spin_duration_seconds == 6
    assert app.options.is_shuffled is False


def test_full_spin_declares_winner(app, event_bus, two_items, spin_to_end):
    assert app.request_spin()
    spin_to_end(app)

    assert not app.is_spinning
    result = app.last_result
    assert result is not None
    assert result.segment == resolve(app.rotation, app.segments)
    assert result.item.id == result.segment.source_item_id
    assert result.name in ("A", "B")

    types = _types(event_bus)
    assert types.index(EventType.SPIN_STARTED) < types.index(EventType.SETTLED)
    assert types.index(EventType.SETTLED) < types.index(EventType.WIN)
    assert types.count(EventType.WIN) == 1
    assert EventType.TICK in types

    win = event_bus.get_history(EventType.WIN)[-1]
    assert win.data["name"] == result.name
    assert win.data["item_id"] == result.item.id
    assert win.data["rotation"] == app.rotation


def test_spin_started_event_describes_session(app, event_bus, two_items):
    app.set_spin_duration(2)
    app.request_spin()

    started = event_bus.get_history(EventType.SPIN_STARTED)[-1]
    assert started.data["duration_ms"] == 2000
    assert started.data["start_rotation"] == 0.0
    assert started.data["target_rotation"] > 5 * TAU


def test_spin_on_empty_wheel_is_ignored(app, event_bus):
    assert app.request_spin() is False
    assert EventType.SPIN_STARTED not in _types(event_bus)
    assert not app.is_spinning


def test_spin_request_while_spinning_is_ignored(app, event_bus, two_items):
    app.request_spin()
    target = app.engine.session.target_rotation

    assert app.request_spin() is False
    assert app.engine.session.target_rotation == target
    assert _types(event_bus).count(EventType.SPIN_STARTED) == 1


def test_new_spin_clears_previous_result(app, two_items, spin_to_end):
    app.request_spin()
    spin_to_end(app)
    assert app.last_result is not None

    app.request_spin()

    assert app.last_result is None
    assert app.draw_request().winner is None


def test_deleting_item_mid_spin_resolves_against_remaining(app, two_items, spin_to_end):
    a, b = two_items
    app.request_spin()
    app.advance(1000)

    app.delete_item(b.id)
    spin_to_end(app)

    assert app.last_result.segment.source_item_id == a.id
    assert app.last_result.item == a


def test_emptying_wheel_mid_spin_has_no_winner(app, event_bus, two_items, spin_to_end):
    app.request_spin()
    app.advance(500)
    for item in app.items.snapshot():
        app.delete_item(item.id)

    spin_to_end(app)

    assert app.last_result is None
    assert EventType.SETTLED in _types(event_bus)
    assert EventType.WIN not in _types(event_bus)


def test_reset_mid_spin(app, event_bus, two_items):
    app.request_spin()
    app.advance(1000)
    rotation = app.rotation

    app.reset()

    assert not app.is_spinning
    assert app.rotation == rotation
    assert app.advance(16) == []
    assert EventType.RESET in _types(event_bus)
    assert EventType.WIN not in _types(event_bus)


def test_failing_handler_does_not_stop_spin(app, event_bus, two_items, spin_to_end):
    def broken(event):
        raise RuntimeError("speaker on fire")

    event_bus.subscribe(EventType.TICK, broken)
    event_bus.subscribe(EventType.WIN, broken)

    app.request_spin()
    spin_to_end(app)

    assert app.last_result is not None


def test_every_frame_emits_draw(app, event_bus, two_items):
    app.request_spin()
    before = _types(event_bus).count(EventType.DRAW)

    app.advance(16)
    app.advance(16)

    assert _types(event_bus).count(EventType.DRAW) == before + 2
    request = event_bus.get_history(EventType.DRAW)[-1].data["request"]
    assert request.is_spinning
    assert request.rotation == app.rotation
    assert len(request.segments) == 2


def test_segments_follow_items_and_shuffle(app):
    a = app.add_item(name="A", split_count=2)
    b = app.add_item(name="B")

    assert [s.source_item_id for s in app.segments] == [a.id, a.id, b.id]
    assert app.segments is app.segments

    app.set_shuffled(True)
    assert [s.source_item_id for s in app.segments] == [a.id, b.id, a.id]

    app.update_field(b.id, "weight", 4)
    assert sum(s.slice_weight for s in app.segments) == 5


def test_update_field_emits_items_changed(app, event_bus):
    item = app.add_item(name="A")

    assert app.update_field(item.id, "textSize", 24)
    assert app.update_field(item.id, "unknown", 1) is False

    assert _types(event_bus).count(EventType.ITEMS_CHANGED) == 2
    assert app.items.get(item.id).text_size == 24


def test_set_spin_duration(app):
    assert app.set_spin_duration("3")
    assert app.options.spin_duration_seconds == 3

    assert app.set_spin_duration(0)
    assert app.options.spin_duration_seconds == 1

    assert app.set_spin_duration("slow") is False
    assert app.options.spin_duration_seconds == 1


def test_options_reach_draw_request(app, event_bus):
    app.set_light_mode(True)
    app.set_background("#FFFFFF")

    request = app.draw_request()
    assert request.theme == "light"
    assert request.background == "#FFFFFF"
    assert EventType.OPTIONS_CHANGED in _types(event_bus)


def test_serialize_and_load(app, rng):
    app.add_item(name="A", weight=2, split_count=3, color="#123456")
    app.set_shuffled(True)
    app.set_spin_duration(4)
    record = app.serialize()

    other = WheelApp(rng=random.Random(0))
    assert other.load_record(json.dumps(record))

    assert other.items.snapshot() == app.items.snapshot()
    assert other.options == app.options


def test_load_malformed_record_reports_error(event_bus):
    errors = []
    app = WheelApp(event_bus=event_bus, on_error=errors.append)
    app.add_item(name="stale")

    assert app.load_record("{not json") is False

    assert len(app.items) == 0
    assert app.options.spin_duration_seconds == 6
    assert len(errors) == 1
    error_event = event_bus.get_history(EventType.ERROR)[-1]
    assert error_event.source == "storage"
    assert error_event.data["error"]


def test_load_legacy_item_list(app):
    legacy = [{"id": "x", "name": "Old", "color": "#FF0000", "weight": 2}]

    assert app.load_record(legacy)

    assert [i.name for i in app.items] == ["Old"]
    assert app.options.is_shuffled is False
    assert app.options.spin_duration_seconds == 6


def test_presets(app):
    presets = PresetStore(MemoryStore())
    app.add_item(name="Lunch")
    assert app.save_preset(presets, "lunch")

    app.delete_item(app.items.snapshot()[0].id)
    app.add_item(name="Dinner")

    assert app.load_preset(presets, "lunch")
    assert [i.name for i in app.items] == ["Lunch"]

    assert app.load_preset(presets, "missing") is False
    assert [i.name for i in app.items] == ["Lunch"]


def test_from_settings_is_reproducible():
    settings = Settings(spin=SpinSettings(seed=7, default_duration_seconds=3))

    targets = []
    for _ in range(2):
        app = WheelApp.from_settings(settings)
        app.add_item(name="A", color="#FF0000")
        app.request_spin()
        targets.append(app.engine.session.target_rotation)

    assert targets[0] == targets[1]
    assert app.options.spin_duration_seconds == 3
    assert app.engine.session.duration_ms == 3000


def test_close_stops_spin(app, event_bus, two_items):
    app.request_spin()

    app.close()

    assert not app.is_spinning
    assert event_bus.get_history() == []


def test_spin_duration_is_capped(app, two_items, spin_to_end):
    assert app.set_spin_duration(1e308)
    assert app.options.spin_duration_seconds == MAX_SPIN_DURATION

    assert app.request_spin()
    assert app.engine.session.duration_ms == MAX_SPIN_DURATION * 1000
    spin_to_end(app, step_ms=1000)
    assert app.last_result is not None


def test_bad_color_edit_still_renders(app, two_items):
    a, _ = two_items
    assert app.update_field(a.id, "color", "hsl(1.2.3, 50%, 50%)")

    buffer = WheelRenderer(size=100).render(app.draw_request())

    assert buffer.shape == (100, 100, 3)
