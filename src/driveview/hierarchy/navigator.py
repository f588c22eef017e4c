"""One-level drill-down over an already loaded flat collection."""

from __future__ import annotations

from typing import Final, Literal, Optional, Sequence, TypeVar, Union

from driveview.models import FileItem, FolderItem, Item, Listing

from .grouping import count_children, with_item_counts


class _Root:
    """Sentinel for the top level of a view (distinct from a dangling id)."""

    def __repr__(self) -> str:
        return "ROOT"


ROOT: Final = _Root()

Scope = Literal["live", "trash"]
Parent = Union[str, _Root, None]

T = TypeVar("T", bound=Item)


def _is_root(parent: Parent) -> bool:
    return parent is None or parent is ROOT


def children_of(
    items: Sequence[T],
    parent: Parent,
    *,
    scope: Scope,
    known_folder_ids: Optional[set[str]] = None,
) -> list[T]:
    """
    Items directly under `parent`.

    Root policy differs by scope:
        - trash: the root of the trash shows every trashed item, whatever
          its parent.
        - live: the root shows items without a resolved parent, plus items
          whose parent is not among `known_folder_ids` (dangling references
          are treated as root-level).
    A folder id always selects exact-match children.
    """
    if scope not in ("live", "trash"):
        raise ValueError(f"unknown scope: {scope!r}")

    if not _is_root(parent):
        return [item for item in items if item.parent_id == parent]

    if scope == "trash":
        return list(items)

    known = known_folder_ids or set()
    return [item for item in items if not item.parent_id or item.parent_id not in known]


def navigate(
    files: Sequence[FileItem],
    folders: Sequence[FolderItem],
    parent: Parent,
    *,
    scope: Scope,
) -> Listing:
    """
    Build the listing for one level.

    Child folder counts are computed over the whole loaded collection, not
    only the visible level.
    """
    known = {fo.id for fo in folders if fo.id}
    counts = count_children([*files, *folders])
    return Listing(
        files=children_of(files, parent, scope=scope, known_folder_ids=known),
        folders=with_item_counts(
            children_of(folders, parent, scope=scope, known_folder_ids=known),
            counts,
        ),
    )
