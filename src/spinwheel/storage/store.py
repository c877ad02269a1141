"""Key-value stores for wheel state and presets.

Values are JSON documents kept as text, the way a browser's local
storage keeps them; parsing is left to the record layer so a damaged
file surfaces as a recoverable load failure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import logging
import re

logger = logging.getLogger(__name__)

_SAFE_KEY_RE = re.compile(r"[^A-Za-z0-9_.-]")


class KeyValueStore(ABC):
    """Minimal string key-value store."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the stored text for ``key`` or None when absent."""

    @abstractmethod
    def save(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``. Returns False on failure."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns False when it was not present."""


class MemoryStore(KeyValueStore):
    """In-process store, used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class JsonFileStore(KeyValueStore):
    """One JSON file per key inside ``data_dir``."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{_SAFE_KEY_RE.sub('_', key)}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            return None

    def save(self, key: str, value: str) -> bool:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to save {path}: {e}")
            return False
        logger.debug(f"Saved {key} to {path}")
        return True

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete {path}: {e}")
            return False
        return True
