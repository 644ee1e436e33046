"""
Key-value storage backends used to persist small string values, such as the
lookup history, across runs.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal storage capability: one string value per key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """A process-local store, mainly useful for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Stores each key as its own file inside a directory.

    Writes go to a temporary file that is then moved over the target, so a reader
    never sees a partially written value.
    """

    _UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")

    def __init__(self, storage_dir: Path):
        self.storage_dir = storage_dir
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _get_path(self, key: str) -> Path:
        """Generates a safe filename for a given key."""
        safe_key = self._UNSAFE_CHARS.sub("_", key)
        return self.storage_dir / f"{safe_key}.json"

    def get(self, key: str) -> str | None:
        path = self._get_path(key)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            log.debug(f"Storage read failed for key '{key}': {e}")
            return None

    def set(self, key: str, value: str) -> None:
        path = self._get_path(key)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.storage_dir, prefix=f".{path.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self._get_path(key).unlink(missing_ok=True)
