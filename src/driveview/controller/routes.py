"""Endpoint paths and request vocabularies of the storage backend."""

from __future__ import annotations

ME = "/auth/me"

FILES = "/files"
FILE = "/files/{id}"
FILE_UPLOAD = "/files/upload"

FOLDERS = "/folders"
FOLDER = "/folders/{id}"

TRASH = "/trash"
TRASH_RESTORE = "/trash/{kind}/{id}/restore"
TRASH_ITEM = "/trash/{kind}/{id}"

SHARE_FILE = "/sharing/files/{id}"
SHARE_FOLDER = "/sharing/folders/{id}"
SHARED_ITEM = "/sharing/shared/{token}"
SHARE = "/sharing/{id}"
MY_SHARES = "/sharing/my-shares"

SEARCH = "/search"
SEARCH_SUGGESTIONS = "/search/suggestions"

ITEM_KINDS: frozenset[str] = frozenset({"file", "folder"})
TRASH_KINDS: frozenset[str] = frozenset({"file", "folder", "all"})
SHARE_PERMISSIONS: frozenset[str] = frozenset({"VIEW", "EDIT"})

# Files accept view/edit; folders only view/download, so EDIT maps to download.
FILE_SHARE_PERMISSION: dict[str, str] = {"VIEW": "view", "EDIT": "edit"}
FOLDER_SHARE_PERMISSION: dict[str, str] = {"VIEW": "view", "EDIT": "download"}

DEFAULT_SHARE_EXPIRY_DAYS = 30
