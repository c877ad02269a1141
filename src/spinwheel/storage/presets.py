"""Named presets: saved wheel records the user can switch between."""

from typing import Any, Optional
import json
import logging

from spinwheel.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

PRESETS_KEY = "presets"


class PresetStore:
    """Mapping of preset name -> wheel record, kept under one store key.

    Names keep the order in which they were first saved.
    """

    def __init__(self, store: KeyValueStore, key: str = PRESETS_KEY) -> None:
        self._store = store
        self._key = key

    def _read(self) -> dict[str, Any]:
        raw = self._store.load(self._key)
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to load presets: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Failed to load presets: expected a mapping, got {type(data).__name__}")
            return {}
        return data

    def _write(self, presets: dict[str, Any]) -> bool:
        return self._store.save(self._key, json.dumps(presets, ensure_ascii=False, indent=2))

    def names(self) -> list[str]:
        """Saved preset names."""
        return list(self._read())

    def save(self, name: str, record: dict[str, Any]) -> bool:
        """Store ``record`` under ``name``, overwriting an existing preset."""
        name = name.strip()
        if not name:
            logger.warning("Ignoring preset with empty name")
            return False
        presets = self._read()
        presets[name] = record
        if self._write(presets):
            logger.info(f"Preset saved: {name}")
            return True
        return False

    def load(self, name: str) -> Optional[dict[str, Any]]:
        """Record saved under ``name`` or None when there is no such preset."""
        record = self._read().get(name)
        if record is None:
            logger.warning(f"Preset not found: {name}")
        return record

    def delete(self, name: str) -> bool:
        presets = self._read()
        if name not in presets:
            return False
        del presets[name]
        if self._write(presets):
            logger.info(f"Preset deleted: {name}")
            return True
        return False
