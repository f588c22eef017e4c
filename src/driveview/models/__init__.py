"""Public model exports for driveview."""

from __future__ import annotations

from .item import FileItem, FolderItem, Item, ItemKind
from .results import PLAN_STORAGE_GB, Listing, Plan, SearchResult, StorageInfo

__all__ = [
    "FileItem",
    "FolderItem",
    "Item",
    "ItemKind",
    "Listing",
    "Plan",
    "PLAN_STORAGE_GB",
    "SearchResult",
    "StorageInfo",
]
