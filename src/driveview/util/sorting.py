from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Sequence, TypeVar

from driveview.models import Item

SortKey = Literal["name", "modified", "size", "type"]

T = TypeVar("T", bound=Item)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def sort_items(items: Sequence[T], by: SortKey = "name", *, descending: bool = False) -> list[T]:
    """
    Sort one kind of items for display.

    - name: case-insensitive
    - modified: updated_at, falling back to created_at; undated items first
    - size: folders count as 0
    - type: MIME type (folders have none)
    Ties keep their input order.
    """
    if by == "name":
        key = lambda it: it.name.casefold()  # noqa: E731
    elif by == "modified":
        key = lambda it: it.updated_at or it.created_at or _EPOCH  # noqa: E731
    elif by == "size":
        key = lambda it: getattr(it, "size", 0)  # noqa: E731
    elif by == "type":
        key = lambda it: getattr(it, "mime_type", "").casefold()  # noqa: E731
    else:
        raise ValueError(f"unknown sort key: {by!r}")
    return sorted(items, key=key, reverse=descending)
