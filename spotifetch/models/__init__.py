"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the application, such as configuration and lookup results.
"""

from .config import AppConfig
from .track import HistoryEntry, LookupResult, TrackReference

__all__ = ["AppConfig", "HistoryEntry", "LookupResult", "TrackReference"]
