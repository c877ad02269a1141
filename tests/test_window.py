import json

from spinwheel.core.wheel import WheelApp
from spinwheel.simulator.window import SimulatorWindow, WindowConfig
from spinwheel.storage.store import MemoryStore


def test_window_uses_configured_themes(tmp_path):
    (tmp_path / "dark.yaml").write_text(
        "name: dark\ncolors:\n  pointer: '#00FF00'\n", encoding="utf-8"
    )

    window = SimulatorWindow(
        app=WheelApp(),
        store=MemoryStore(),
        config=WindowConfig(size=100, themes_path=tmp_path),
    )

    assert window.renderer.theme("dark").colors.pointer == "#00FF00"


def test_window_loads_and_saves_state(app):
    store = MemoryStore()
    window = SimulatorWindow(app=app, store=store, config=WindowConfig(size=100))

    window.load()
    window.save()

    saved = json.loads(store.load("wheel_state"))
    assert [item["name"] for item in saved["items"]] == ["Tacos", "Burger", "Pizza"]
