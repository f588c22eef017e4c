"""Exception hierarchy and HTTP error mapping for driveview."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DriveViewError(Exception):
    """
    Base exception for driveview.

    Attributes:
        details: Optional structured information (e.g., HTTP status, body).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidStateError(DriveViewError):
    """Raised when the library is used in an invalid state (e.g., no view loaded)."""


class NetworkError(DriveViewError):
    """Raised when no response was received (connection failure, timeout)."""


class ApiError(DriveViewError):
    """Raised when the backend answered with an error status."""

    @property
    def status_code(self) -> int:
        value = self.details.get("status_code")
        return value if isinstance(value, int) else 0


class InvalidArgumentError(ApiError):
    """Raised when request arguments are invalid (HTTP 400, or rejected locally)."""


class AuthError(ApiError):
    """Raised when the access token is missing, expired or rejected (HTTP 401)."""


class PermissionError(ApiError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class NotFoundError(ApiError):
    """Raised when a resource is not found (HTTP 404)."""


class ConflictError(ApiError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(ApiError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(ApiError):
    """Raised when the storage quota is exceeded (HTTP 403/413 with quota reason)."""


class LoadError(DriveViewError):
    """Raised when every request backing a view failed."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to driveview exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


DEFAULT_ERROR_MESSAGE = "An error occurred"

_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "storageLimit",
    "storage_limit",
    "insufficientStorage",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> ApiError:
    """
    Map an HTTP error to a driveview exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError, but QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 413 with quota reason -> QuotaExceededError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or DEFAULT_ERROR_MESSAGE

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code in (403, 413) and _is_quota_reason(info.reason):
        return QuotaExceededError(message, details=details, cause=cause)
    if info.status_code == 403:
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)


def describe_error(exc: BaseException) -> dict[str, Any]:
    """
    Dump an exception into a plain dict for structured logging.

    Walks the explicit `cause` chain (and `__cause__`) so that transport
    errors hidden behind a wrapper still show up in the log record.
    """
    dump: dict[str, Any] = {
        "type": exc.__class__.__name__,
        "message": str(exc),
    }
    if isinstance(exc, DriveViewError):
        if exc.details:
            dump["details"] = dict(exc.details)
        if isinstance(exc, ApiError):
            dump["status_code"] = exc.status_code

    attrs = {
        key: value
        for key, value in vars(exc).items()
        if not key.startswith("_") and key not in ("details", "cause")
    }
    if attrs:
        dump["attributes"] = {key: repr(value) for key, value in attrs.items()}

    cause = exc.cause if isinstance(exc, DriveViewError) else None
    cause = cause or exc.__cause__
    if cause is not None and cause is not exc:
        dump["cause"] = describe_error(cause)
    return dump
