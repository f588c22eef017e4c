"""Public error exports for driveview."""

from __future__ import annotations

from .exceptions import (
    DEFAULT_ERROR_MESSAGE,
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

__all__ = [
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
    "DEFAULT_ERROR_MESSAGE",
    "describe_error",
    "map_http_error",
]
