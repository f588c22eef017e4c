"""
Field probing for loosely-typed backend records.

The backend has renamed its reference fields across versions, and the trash
subsystem stores "where did this come from" under yet other names. Every
lookup goes through one of the ordered path tuples below; the first present
value wins and nothing is merged.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

FieldPath = tuple[str, ...]


def field_paths(*dotted: str) -> tuple[FieldPath, ...]:
    return tuple(tuple(p.split(".")) for p in dotted)


PARENT_ID_PATHS: tuple[FieldPath, ...] = field_paths(
    "parentId",
    "parent_id",
    "folderId",
    "folder_id",
    "parent.id",
    "directoryId",
    "directory_id",
    # trash payloads: where the item lived before deletion
    "originalParentId",
    "original_parent_id",
    "originalFolderId",
    "original_folder_id",
    "previousParentId",
    "previous_parent_id",
    "previousFolderId",
    "previous_folder_id",
    "sourceParentId",
    "source_parent_id",
    "sourceFolderId",
    "source_folder_id",
    "movedFromId",
    "moved_from_id",
    "oldParentId",
    "old_parent_id",
    "parentFolderId",
    "parent_folder_id",
    "originParentId",
    "origin_parent_id",
    # nested containers
    "original.parentId",
    "original.parent_id",
    "trashInfo.parentId",
    "trashInfo.parent_id",
    "trash.parentId",
    "trash.parent_id",
    "deleted.parentId",
    "deleted.parent_id",
    "meta.parentId",
    "meta.parent_id",
)

FOLDER_ID_PATHS: tuple[FieldPath, ...] = field_paths(
    "id",
    "_id",
    "uuid",
    "folderId",
    "folder_id",
    "originalId",
    "original_id",
    "sourceId",
    "source_id",
    "previousId",
    "previous_id",
    "deleted.id",
    "trash.id",
    "meta.id",
)

ITEM_ID_PATHS: tuple[FieldPath, ...] = field_paths("id", "_id", "uuid")

DELETED_AT_PATHS: tuple[FieldPath, ...] = field_paths(
    "deletedAt",
    "deleted_at",
    "trashedAt",
    "trashed_at",
    "trashInfo.deletedAt",
    "deleted.at",
)


def get_path(record: Any, path: FieldPath) -> Any:
    """Follow `path` through nested dicts; None if any step is missing."""
    cur = record
    for key in path:
        if not isinstance(cur, dict):
            return None
        cur = cur.get(key)
        if cur is None:
            return None
    return cur


def probe(
    record: Any,
    paths: Sequence[FieldPath],
    *,
    accept: Optional[Callable[[Any], bool]] = None,
) -> Any:
    """
    Return the value at the first path that is present and non-null.

    Empty strings count as absent: the backend sends `""` for "no parent".
    Values rejected by `accept` are skipped as well.
    """
    for path in paths:
        value = get_path(record, path)
        if value is None or value == "":
            continue
        if accept is not None and not accept(value):
            continue
        return value
    return None


def _is_scalar_id(value: Any) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def _probe_id(record: Any, paths: Sequence[FieldPath]) -> Optional[str]:
    value = probe(record, paths, accept=_is_scalar_id)
    return None if value is None else str(value)


def resolve_parent_id(record: Any) -> Optional[str]:
    """Effective parent folder id of a record, or None for root."""
    return _probe_id(record, PARENT_ID_PATHS)


def resolve_folder_id(record: Any) -> Optional[str]:
    """A folder's own id, including the aliases used in trash payloads."""
    return _probe_id(record, FOLDER_ID_PATHS)


def resolve_item_id(record: Any) -> Optional[str]:
    return _probe_id(record, ITEM_ID_PATHS)
