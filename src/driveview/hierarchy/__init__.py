"""Reconstruction of the folder hierarchy from flat, loosely-typed listings."""

from __future__ import annotations

from .decoders import DEFAULT_DECODERS, extract_records, extract_share_targets, unwrap
from .fields import (
    FOLDER_ID_PATHS,
    PARENT_ID_PATHS,
    resolve_folder_id,
    resolve_item_id,
    resolve_parent_id,
)
from .grouping import aggregate, count_children, with_item_counts
from .navigator import ROOT, children_of, navigate
from .overlay import StarOverlay, backend_starred
from .records import split_by_kind, to_file_item, to_file_items, to_folder_item, to_folder_items

__all__ = [
    "DEFAULT_DECODERS",
    "extract_records",
    "extract_share_targets",
    "unwrap",
    "PARENT_ID_PATHS",
    "FOLDER_ID_PATHS",
    "resolve_parent_id",
    "resolve_folder_id",
    "resolve_item_id",
    "aggregate",
    "count_children",
    "with_item_counts",
    "ROOT",
    "children_of",
    "navigate",
    "StarOverlay",
    "backend_starred",
    "split_by_kind",
    "to_file_item",
    "to_file_items",
    "to_folder_item",
    "to_folder_items",
]
