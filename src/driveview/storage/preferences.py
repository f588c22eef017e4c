"""Per-user client-only preferences: starred overlay, plan, recent searches."""

from __future__ import annotations

from typing import Any, Sequence

from driveview.models import PLAN_STORAGE_GB, Plan

from .store import JsonFileStore, NamespacedStore

STARRED_IDS_KEY = "starredIds"
PLAN_KEY = "gd_plan"
RECENT_SEARCHES_KEY = "recentSearches"

LEGACY_KEYS: tuple[str, ...] = (STARRED_IDS_KEY, PLAN_KEY, RECENT_SEARCHES_KEY)

MAX_RECENT_SEARCHES = 10
DEFAULT_PLAN: Plan = "free"


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


class UserPreferences:
    """Typed accessors over a user's namespaced store."""

    def __init__(self, store: NamespacedStore) -> None:
        self._store = store

    @classmethod
    def open(cls, store: JsonFileStore, user_id: str) -> UserPreferences:
        """Open preferences for user_id, migrating legacy un-namespaced keys first."""
        namespaced = NamespacedStore(store, user_id)
        for key in LEGACY_KEYS:
            namespaced.migrate_legacy(key)
        return cls(namespaced)

    @property
    def user_id(self) -> str:
        return self._store.user_id

    # Star overlay storage
    def load_starred_ids(self) -> list[str]:
        return _str_list(self._store.get(STARRED_IDS_KEY))

    def save_starred_ids(self, ids: Sequence[str]) -> None:
        self._store.set(STARRED_IDS_KEY, list(ids))

    # Plan indicator
    @property
    def plan(self) -> Plan:
        value = self._store.get(PLAN_KEY)
        if isinstance(value, str) and value in PLAN_STORAGE_GB:
            return value  # type: ignore[return-value]
        return DEFAULT_PLAN

    @plan.setter
    def plan(self, value: str) -> None:
        if value not in PLAN_STORAGE_GB:
            raise ValueError(f"unknown plan: {value!r}")
        self._store.set(PLAN_KEY, value)

    # Recent searches
    @property
    def recent_searches(self) -> list[str]:
        return _str_list(self._store.get(RECENT_SEARCHES_KEY))

    def add_recent_search(self, query: str) -> list[str]:
        """Put query first (deduplicated), keep the newest MAX_RECENT_SEARCHES."""
        query = query.strip() if isinstance(query, str) else ""
        current = self.recent_searches
        if not query:
            return current
        updated = [query, *(q for q in current if q != query)][:MAX_RECENT_SEARCHES]
        self._store.set(RECENT_SEARCHES_KEY, updated)
        return updated

    def clear_recent_searches(self) -> None:
        self._store.delete(RECENT_SEARCHES_KEY)
