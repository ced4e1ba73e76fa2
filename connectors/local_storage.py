"""
Module: connectors.local_storage

Provides a file-backed key-value store with browser localStorage semantics:
string keys mapped to string values, persisted as one JSON object on disk.
"""

import json
import logging
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    Minimal localStorage-style store. Values are always strings; callers
    serialise their own payloads.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not contain a JSON object.")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def get_item(self, key: str) -> str | None:
        """Return the stored string for ``key``, or None if absent."""
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("LocalStorage values must be strings.")
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)
        logger.debug(f"Stored {len(value)} characters under key '{key}' in {self.path}")

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)
                logger.debug(f"Removed key '{key}' from {self.path}")

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._read_all().keys())
