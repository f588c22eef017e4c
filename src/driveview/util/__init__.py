from .format import format_bytes
from .mime import FOLDER_MIME, can_preview, file_category, is_file_like, is_folder_like
from .sorting import sort_items
from .time import now_utc, parse_rfc3339, parse_timestamp, to_rfc3339

__all__ = [
    "format_bytes",
    "FOLDER_MIME",
    "can_preview",
    "file_category",
    "is_file_like",
    "is_folder_like",
    "sort_items",
    "now_utc",
    "parse_rfc3339",
    "parse_timestamp",
    "to_rfc3339",
]
