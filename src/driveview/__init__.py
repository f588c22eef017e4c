"""driveview public API."""

from __future__ import annotations

import logging

from driveview.auth import AuthInfo
from driveview.config import ClientConfig
from driveview.controller import DriveApiClient
from driveview.errors import (
    ApiError,
    AuthError,
    ConflictError,
    DriveViewError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    LoadError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    describe_error,
    map_http_error,
)
from driveview.hierarchy import ROOT, StarOverlay, extract_records, navigate
from driveview.manager import DriveBrowser
from driveview.models import FileItem, FolderItem, Listing, SearchResult, StorageInfo
from driveview.storage import JsonFileStore, UserPreferences

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # High-level
    "DriveBrowser",
    "DriveApiClient",
    "ClientConfig",
    # Auth
    "AuthInfo",
    # Hierarchy
    "ROOT",
    "StarOverlay",
    "extract_records",
    "navigate",
    # Models
    "FileItem",
    "FolderItem",
    "Listing",
    "SearchResult",
    "StorageInfo",
    # Local state
    "JsonFileStore",
    "UserPreferences",
    # Errors
    "DriveViewError",
    "InvalidStateError",
    "NetworkError",
    "ApiError",
    "InvalidArgumentError",
    "AuthError",
    "PermissionError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "LoadError",
    "HttpErrorInfo",
    "describe_error",
    "map_http_error",
]
