"""Persistence: record format, key-value stores and presets."""

from .record import LoadedState, RecordError, deserialize, parse_record, serialize
from .store import JsonFileStore, KeyValueStore, MemoryStore
from .presets import PresetStore

__all__ = [
    "LoadedState",
    "RecordError",
    "deserialize",
    "parse_record",
    "serialize",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "PresetStore",
]
