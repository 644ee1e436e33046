"""
Capped, deduplicated history of successful lookups, persisted through a
key-value store.
"""

import json
import logging

from pydantic import ValidationError

from spotifetch.models.config import DEFAULT_HISTORY_KEY, MAX_HISTORY_ITEMS
from spotifetch.models.track import HistoryEntry, LookupResult

from .kv_store import KeyValueStore

log = logging.getLogger(__name__)


class HistoryStore:
    """
    Keeps the most recent successful lookups, newest first.

    The store holds no state of its own: every call reads the persisted list, so
    what a caller gets back always matches what is in storage.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_HISTORY_KEY,
        max_items: int = MAX_HISTORY_ITEMS,
    ):
        self._store = store
        self.key = key
        self.max_items = max_items

    def load(self) -> list[HistoryEntry]:
        """Returns the persisted history, or an empty list if it is missing or corrupt."""
        raw = self._store.get(self.key)
        if raw is None:
            return []

        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f"expected a JSON array, got {type(items).__name__}")
            entries = [HistoryEntry.model_validate(item) for item in items]
        except (ValueError, ValidationError) as e:
            log.debug(f"Ignoring unreadable history under '{self.key}': {e}")
            return []

        return entries[: self.max_items]

    def record(self, entry: HistoryEntry) -> list[HistoryEntry]:
        """
        Puts `entry` at the front, dropping any older entry for the same source URL
        and anything beyond the size cap, then persists and returns the new list.
        """
        others = [e for e in self.load() if e.source_url != entry.source_url]
        updated = [entry, *others][: self.max_items]
        self._persist(updated)
        log.debug(f"Recorded '{entry.title}' in history ({len(updated)} entries).")
        return updated

    def record_result(
        self, result: LookupResult, source_url: str
    ) -> list[HistoryEntry]:
        return self.record(HistoryEntry.from_result(result, source_url))

    def clear(self) -> list[HistoryEntry]:
        """Erases the persisted history."""
        self._store.remove(self.key)
        log.debug(f"History under '{self.key}' cleared.")
        return []

    def _persist(self, entries: list[HistoryEntry]) -> None:
        payload = [entry.to_storage() for entry in entries]
        self._store.set(self.key, json.dumps(payload))
