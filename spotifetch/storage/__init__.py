"""
Storage Layer.

This package handles all data persistence: the configuration file, the
key-value store backends, and the lookup history kept on top of them.
"""

from .config_manager import ConfigManager
from .history import HistoryStore
from .kv_store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "ConfigManager",
    "HistoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
