"""Client-side starred overlay merged over backend flags at read time."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, Optional, Protocol, Sequence, TypeVar

from driveview.models import Item

from .fields import field_paths, get_path

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Item)

_STARRED_PATHS = field_paths(
    "isStarred",
    "starred",
    "is_starred",
    "star",
    "flags.starred",
    "metadata.starred",
)


def backend_starred(record: Any) -> bool:
    """Starred flag as declared by the backend, under any of its spellings."""
    if not isinstance(record, dict):
        return False
    for path in _STARRED_PATHS:
        if get_path(record, path):
            return True
    labels = record.get("labels")
    return isinstance(labels, list) and "starred" in labels


class OverlayStore(Protocol):
    def load_starred_ids(self) -> list[str]: ...

    def save_starred_ids(self, ids: Sequence[str]) -> None: ...


class StarOverlay:
    """
    Set of item ids the user starred locally.

    The backend does not reliably persist the starred flag, so the effective
    flag is `backend_starred OR id in overlay`. It is always derived from
    `backend_starred`, never from a previously merged `starred`, so copies
    returned by `effective` can be passed back in. Fetched items are never
    mutated; `effective` returns copies. Every toggle is written to the
    store before returning.
    """

    def __init__(self, store: Optional[OverlayStore] = None) -> None:
        self._store = store
        self._ids: set[str] = set(store.load_starred_ids()) if store is not None else set()

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._ids)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def is_starred(self, item: Item) -> bool:
        return item.backend_starred or (bool(item.id) and item.id in self._ids)

    def effective(self, items: Iterable[T]) -> list[T]:
        """Copies of items with `starred` set to the effective value."""
        out: list[T] = []
        for item in items:
            flag = self.is_starred(item)
            out.append(item if flag == item.starred else dataclasses.replace(item, starred=flag))
        return out

    def starred_only(self, items: Iterable[T]) -> list[T]:
        """Items whose effective flag is set, returned as given (unmerged)."""
        return [item for item in items if self.is_starred(item)]

    def toggle(self, item_id: str) -> bool:
        """Flip membership of item_id; returns True if it is now in the overlay."""
        if not item_id:
            raise ValueError("item_id must be a non-empty string")

        if item_id in self._ids:
            self._ids.discard(item_id)
            added = False
        else:
            self._ids.add(item_id)
            added = True
        self._persist()
        logger.debug("star overlay toggled", extra={"item_id": item_id, "starred": added})
        return added

    def clear(self) -> None:
        self._ids.clear()
        self._persist()

    def _persist(self) -> None:
        if self._store is not None:
            self._store.save_starred_ids(sorted(self._ids))
