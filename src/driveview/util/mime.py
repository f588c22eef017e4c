from __future__ import annotations

from typing import Any

FOLDER_MIME: str = "application/vnd.google-apps.folder"

FileCategory = str


def file_category(mime_type: str) -> FileCategory:
    """
    Classify a MIME type into the coarse categories used by the `/files`
    `category` filter.
    """
    mime = (mime_type or "").lower()
    if mime.startswith("image/"):
        return "image"
    if mime.startswith("video/"):
        return "video"
    if mime.startswith("audio/"):
        return "audio"
    if mime == "application/pdf":
        return "pdf"
    if "document" in mime or "word" in mime:
        return "document"
    if "spreadsheet" in mime or "excel" in mime:
        return "spreadsheet"
    if "presentation" in mime or "powerpoint" in mime:
        return "presentation"
    if mime.startswith("text/") or mime == "application/json":
        return "text"
    if "zip" in mime or "rar" in mime or "7z" in mime:
        return "archive"
    return "other"


def can_preview(mime_type: str) -> bool:
    return file_category(mime_type) in ("image", "video", "audio", "pdf", "text")


def _kind_tag(record: Any) -> str:
    tag = record.get("type") if isinstance(record, dict) else None
    return tag.lower() if isinstance(tag, str) else ""


def is_file_like(record: Any) -> bool:
    """A record is a file if tagged so, or if it carries a MIME type or a size."""
    if not isinstance(record, dict):
        return False
    tag = _kind_tag(record)
    if tag == "folder" or record.get("isFolder") is True:
        return False
    if tag == "file":
        return True
    mime = record.get("mimeType") or record.get("mime_type")
    if mime == FOLDER_MIME:
        return False
    return bool(mime) or bool(record.get("size"))


def is_folder_like(record: Any) -> bool:
    """A record is a folder if tagged so, or if it is named and not file-like."""
    if not isinstance(record, dict):
        return False
    tag = _kind_tag(record)
    if tag == "folder" or record.get("isFolder") is True:
        return True
    if record.get("mimeType") == FOLDER_MIME:
        return True
    if tag == "file":
        return False
    return not is_file_like(record) and bool(record.get("name"))
