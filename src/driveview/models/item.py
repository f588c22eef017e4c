"""Data model for backend file and folder records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Literal, Optional, Union

ItemKind = Literal["file", "folder"]


@dataclass(slots=True)
class FileItem:
    """
    A file record as seen by the client.

    Notes:
        - parent_id is the *resolved* parent (None means root), not whatever
          field name the backend happened to use.
        - backend_starred is the flag declared by the backend and never
          changes after conversion. starred is the effective flag: equal to
          backend_starred on fetched items, and set by StarOverlay on the
          copies it returns.
        - raw keeps the original record for diagnostics and is excluded
          from equality.
    """

    kind: ClassVar[ItemKind] = "file"

    id: str
    name: str
    mime_type: str = ""
    size: int = 0
    parent_id: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    starred: bool = False
    backend_starred: bool = False
    shared: bool = False
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(slots=True)
class FolderItem:
    """
    A folder record as seen by the client.

    item_count is view-local: it is recomputed from the loaded collection
    and never trusted from the backend. starred and backend_starred behave
    as on FileItem.
    """

    kind: ClassVar[ItemKind] = "folder"

    id: str
    name: str
    parent_id: Optional[str] = None
    item_count: Optional[int] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    starred: bool = False
    backend_starred: bool = False
    shared: bool = False
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


Item = Union[FileItem, FolderItem]
