"""Public storage exports for driveview."""

from __future__ import annotations

from .preferences import MAX_RECENT_SEARCHES, UserPreferences
from .store import JsonFileStore, NamespacedStore

__all__ = [
    "JsonFileStore",
    "NamespacedStore",
    "UserPreferences",
    "MAX_RECENT_SEARCHES",
]
