import json

import pytest

from spinwheel.storage.presets import PRESETS_KEY, PresetStore
from spinwheel.storage.store import JsonFileStore, MemoryStore


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(tmp_path / "data")


def test_missing_key(store):
    assert store.load("nothing") is None
    assert store.delete("nothing") is False


def test_save_load_delete(store):
    assert store.save("wheel_state", '{"items": []}')
    assert store.load("wheel_state") == '{"items": []}'

    assert store.save("wheel_state", "[]")
    assert store.load("wheel_state") == "[]"

    assert store.delete("wheel_state")
    assert store.load("wheel_state") is None


def test_file_store_layout(tmp_path):
    store = JsonFileStore(tmp_path)

    store.save("my/odd key", "{}")

    assert (tmp_path / "my_odd_key.json").read_text(encoding="utf-8") == "{}"
    assert not list(tmp_path.glob("*.tmp"))
    assert store.load("my/odd key") == "{}"


def test_file_store_creates_directory(tmp_path):
    target = tmp_path / "a" / "b"

    JsonFileStore(target)

    assert target.is_dir()


def test_presets_save_and_list(store):
    presets = PresetStore(store)

    assert presets.save("Lunch", {"items": []})
    assert presets.save(" Dinner ", {"items": [{"name": "Soup"}]})

    assert presets.names() == ["Lunch", "Dinner"]
    assert presets.load("Dinner") == {"items": [{"name": "Soup"}]}
    assert json.loads(store.load(PRESETS_KEY))["Lunch"] == {"items": []}


def test_presets_overwrite(store):
    presets = PresetStore(store)
    presets.save("Lunch", {"items": []})

    presets.save("Lunch", {"items": [{"name": "Pho"}]})

    assert presets.names() == ["Lunch"]
    assert presets.load("Lunch") == {"items": [{"name": "Pho"}]}


def test_presets_reject_empty_name(store):
    presets = PresetStore(store)

    assert presets.save("   ", {"items": []}) is False
    assert presets.names() == []


def test_presets_unknown_name(store):
    presets = PresetStore(store)

    assert presets.load("missing") is None
    assert presets.delete("missing") is False


def test_presets_delete(store):
    presets = PresetStore(store)
    presets.save("Lunch", {})

    assert presets.delete("Lunch")
    assert presets.names() == []


@pytest.mark.parametrize("raw", ["{broken", "[1, 2, 3]"])
def test_corrupted_presets_read_as_empty(raw):
    presets = PresetStore(MemoryStore({PRESETS_KEY: raw}))

    assert presets.names() == []
    assert presets.load("anything") is None
    assert presets.save("fresh", {"items": []})
    assert presets.names() == ["fresh"]
