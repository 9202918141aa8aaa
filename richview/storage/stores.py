"""
Key-value stores backing the persistence gateway.

The gateway only needs get/set/delete of strings under a key, the contract
of browser local storage. MemoryStore keeps values for the process
lifetime; FileStore keeps them in one JSON object on disk.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path

from ..config import EditorSettings, get_settings


logger = logging.getLogger(__name__)


class KeyValueStore:

    def get(self, key: str) -> str | None:
        raise NotImplementedError("KeyValueStore.get is not implemented")

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError("KeyValueStore.set is not implemented")

    def delete(self, key: str) -> None:
        raise NotImplementedError("KeyValueStore.delete is not implemented")


class MemoryStore(KeyValueStore):

    def __init__(self, values: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class FileStore(KeyValueStore):
    """
    Stores every key in one JSON file. Writes go to a temporary file that
    replaces the original, so a crash never leaves half a file behind.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: not a JSON object", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(values, sort_keys=True), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value
        self._write(values)

    def delete(self, key: str) -> None:
        values = self._read()
        if values.pop(key, None) is not None:
            self._write(values)


def create_store(settings: EditorSettings | None = None) -> KeyValueStore:
    settings = settings or get_settings()
    if settings.storage_path:
        return FileStore(settings.storage_path)
    return MemoryStore()
