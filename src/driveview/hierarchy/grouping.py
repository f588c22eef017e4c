"""Per-folder child counts computed from a flat collection."""

from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Iterable, Sequence

from driveview.models import FileItem, FolderItem, Item


def count_children(items: Iterable[Item]) -> dict[str, int]:
    """
    Map each resolved parent id to the number of items under it.

    Single pass over items; root-level items (parent_id None) are not
    counted toward anything.
    """
    counts: Counter[str] = Counter(item.parent_id for item in items if item.parent_id)
    return dict(counts)


def with_item_counts(
    folders: Iterable[FolderItem],
    counts: dict[str, int],
) -> list[FolderItem]:
    """
    Copies of folders with item_count overwritten from counts.

    Backend-supplied counts are discarded; folders without children get 0.
    """
    return [dataclasses.replace(fo, item_count=counts.get(fo.id, 0)) for fo in folders]


def aggregate(
    files: Sequence[FileItem],
    folders: Sequence[FolderItem],
) -> tuple[dict[str, int], list[FolderItem]]:
    """Count children over files + folders and apply the counts to folders."""
    counts = count_children([*files, *folders])
    return counts, with_item_counts(folders, counts)
