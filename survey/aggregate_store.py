import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from config import STORAGE_KEY

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed key/value storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """Key/value storage with one ``<key>.json`` file per entry."""

    def __init__(self, directory: str):
        self.directory = Path(directory)
        os.makedirs(self.directory, exist_ok=True)
        logger.info(f"File storage initialized at {self.directory}")

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        fd, tmp = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, self._path(key))
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


def _parse_counts(raw: str) -> Dict[str, int]:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Aggregate entry must be a JSON object, got {type(data).__name__}")
    counts: Dict[str, int] = {}
    for name, value in data.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"Invalid count for {name!r}: {value!r}")
        counts[str(name)] = value
    return counts


class AggregateStore:
    """Running tally of winning personas, persisted after every change."""

    def __init__(self, storage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._counts: Dict[str, int] = {}
        self.load()

    def load(self) -> Dict[str, int]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            self._counts = {}
            return self.snapshot()
        try:
            self._counts = _parse_counts(raw)
        except ValueError as e:  # json.JSONDecodeError is a ValueError
            logger.warning(f"Discarding unreadable aggregate entry {self.key!r}: {e}")
            self._counts = {}
        return self.snapshot()

    def save(self) -> None:
        self.storage.set_item(self.key, json.dumps(self._counts))

    def increment(self, persona: str) -> int:
        self._counts[persona] = self._counts.get(persona, 0) + 1
        self.save()
        return self._counts[persona]

    def clear(self) -> None:
        self._counts = {}
        self.storage.remove_item(self.key)
        logger.info(f"Aggregate entry {self.key!r} cleared")

    def snapshot(self) -> Dict[str, int]:
        return dict(self._counts)

    def get(self, persona: str) -> int:
        return self._counts.get(persona, 0)

    def total(self) -> int:
        return sum(self._counts.values())

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, persona) -> bool:
        return persona in self._counts
