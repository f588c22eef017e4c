"""Result models for views, searches and storage usage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .item import FileItem, FolderItem

Plan = Literal["free", "pro", "business"]

PLAN_STORAGE_GB: dict[str, int] = {
    "free": 15,
    "pro": 200,
    "business": 2000,
}

_GIB = 1024 * 1024 * 1024


@dataclass(slots=True)
class Listing:
    """One level of the hierarchy, ready to render."""

    files: list[FileItem] = field(default_factory=list)
    folders: list[FolderItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.files) + len(self.folders)

    @property
    def is_empty(self) -> bool:
        return not self.files and not self.folders


@dataclass(slots=True)
class SearchResult:
    files: list[FileItem] = field(default_factory=list)
    folders: list[FolderItem] = field(default_factory=list)
    total: int = 0
    suggestions: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class StorageInfo:
    """
    Storage usage in bytes.

    Built directly, the values are kept as reported (the backend may report
    used above its own limit). for_plan guarantees used within [0, total].
    """

    used: int
    total: int

    @classmethod
    def for_plan(cls, used: int, plan: str) -> StorageInfo:
        """
        Derive the quota from the plan, ignoring whatever limit the backend
        reports (its units are not reliable).
        """
        total = PLAN_STORAGE_GB.get(plan, PLAN_STORAGE_GB["free"]) * _GIB
        return cls(used=max(0, min(int(used), total)), total=total)

    @property
    def free(self) -> int:
        return self.total - self.used

    @property
    def percent_used(self) -> float:
        if self.total <= 0:
            return 0.0
        return 100.0 * self.used / self.total
