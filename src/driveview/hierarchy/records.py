"""Conversion of raw backend records into FileItem / FolderItem."""

from __future__ import annotations

from typing import Any, Iterable

from driveview.models import FileItem, FolderItem
from driveview.util.mime import is_file_like, is_folder_like
from driveview.util.time import parse_timestamp

from .fields import (
    DELETED_AT_PATHS,
    field_paths,
    probe,
    resolve_folder_id,
    resolve_item_id,
    resolve_parent_id,
)
from .overlay import backend_starred

_CREATED_AT_PATHS = field_paths("createdAt", "created_at")
_UPDATED_AT_PATHS = field_paths("updatedAt", "updated_at", "modifiedAt", "modified_at")
_SHARED_PATHS = field_paths("isShared", "shared", "is_shared")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _size(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


def _item_count(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


def to_file_item(record: dict[str, Any]) -> FileItem:
    flagged = backend_starred(record)
    return FileItem(
        id=resolve_item_id(record) or "",
        name=_text(record.get("name") or record.get("originalName")),
        mime_type=_text(record.get("mimeType") or record.get("mime_type")),
        size=_size(record.get("size")),
        parent_id=resolve_parent_id(record),
        created_at=parse_timestamp(probe(record, _CREATED_AT_PATHS)),
        updated_at=parse_timestamp(probe(record, _UPDATED_AT_PATHS)),
        deleted_at=parse_timestamp(probe(record, DELETED_AT_PATHS)),
        starred=flagged,
        backend_starred=flagged,
        shared=bool(probe(record, _SHARED_PATHS)),
        raw=record,
    )


def to_folder_item(record: dict[str, Any]) -> FolderItem:
    flagged = backend_starred(record)
    return FolderItem(
        id=resolve_folder_id(record) or "",
        name=_text(record.get("name")),
        parent_id=resolve_parent_id(record),
        item_count=_item_count(record.get("itemCount")),
        created_at=parse_timestamp(probe(record, _CREATED_AT_PATHS)),
        updated_at=parse_timestamp(probe(record, _UPDATED_AT_PATHS)),
        deleted_at=parse_timestamp(probe(record, DELETED_AT_PATHS)),
        starred=flagged,
        backend_starred=flagged,
        shared=bool(probe(record, _SHARED_PATHS)),
        raw=record,
    )


def to_file_items(records: Iterable[dict[str, Any]]) -> list[FileItem]:
    return [to_file_item(r) for r in records]


def to_folder_items(records: Iterable[dict[str, Any]]) -> list[FolderItem]:
    return [to_folder_item(r) for r in records]


def split_by_kind(
    records: Iterable[dict[str, Any]],
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """
    Separate a mixed list into (files, folders) by kind heuristics.

    Records that look like neither are dropped.
    """
    files: list[dict[str, Any]] = []
    folders: list[dict[str, Any]] = []
    for record in records:
        if is_folder_like(record):
            folders.append(record)
        elif is_file_like(record):
            files.append(record)
    return files, folders
