"""Storage backend REST client."""

from __future__ import annotations

import logging
import mimetypes
import os
from typing import Any, Optional

import httpx

from driveview.auth import AuthInfo
from driveview.config import ClientConfig
from driveview.errors import (
    DEFAULT_ERROR_MESSAGE,
    ApiError,
    DriveViewError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    describe_error,
    map_http_error,
)
from driveview.hierarchy import extract_records, to_file_items, to_folder_items, unwrap
from driveview.models import SearchResult, StorageInfo

from . import routes

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error - please check your connection"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class DriveApiClient:
    """
    Thin client over the storage backend's REST API.

    Notes:
        - Methods return the decoded JSON body as-is. Shape normalization is
          the caller's job (see driveview.hierarchy), because list endpoints
          do not agree on where they put their records.
        - No request is retried automatically.
        - The bearer token is attached only while it is unexpired; an
          expired token is left off and the backend answers 401.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        auth_info: Optional[AuthInfo] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._auth_info = auth_info
        self._http = httpx.Client(
            base_url=self._config.base_url,
            timeout=httpx.Timeout(self._config.timeout_sec),
            transport=transport,
            follow_redirects=True,
        )

    @classmethod
    def from_http_client(
        cls,
        http: httpx.Client,
        *,
        auth_info: Optional[AuthInfo] = None,
        config: Optional[ClientConfig] = None,
    ) -> "DriveApiClient":
        """Create a client around a pre-built httpx.Client (useful for tests)."""
        obj = cls.__new__(cls)
        obj._config = config or ClientConfig()
        obj._auth_info = auth_info
        obj._http = http
        return obj

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "DriveApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def auth_info(self) -> Optional[AuthInfo]:
        return self._auth_info

    @auth_info.setter
    def auth_info(self, value: Optional[AuthInfo]) -> None:
        self._auth_info = value

    # ----------------------------
    # Account
    # ----------------------------
    def get_current_user(self) -> Any:
        return self._request("GET", routes.ME)

    def get_storage_info(self) -> StorageInfo:
        """Usage as reported by the backend (limit units are not trusted upstream)."""
        body = unwrap(self.get_current_user())
        user = body.get("user") if isinstance(body, dict) else None
        user = user if isinstance(user, dict) else {}
        return StorageInfo(
            used=_as_int(user.get("storageUsed")),
            total=_as_int(user.get("storageLimit")),
        )

    # ----------------------------
    # Files
    # ----------------------------
    def list_files(
        self,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        folder_id: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Any:
        params = {
            "page": page,
            "limit": limit,
            "sortBy": sort_by,
            "sortOrder": sort_order,
            "folderId": folder_id,
            "category": category,
            "search": search,
        }
        return self._request("GET", routes.FILES, params=params)

    def get_file(self, file_id: str) -> Any:
        return self._request("GET", routes.FILE.format(id=_require_id(file_id)))

    def update_file(
        self,
        file_id: str,
        *,
        name: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> Any:
        body = _drop_none({"name": name, "folderId": folder_id})
        return self._request("PUT", routes.FILE.format(id=_require_id(file_id)), json=body)

    def move_file(self, file_id: str, folder_id: Optional[str]) -> Any:
        """Move a file; folder_id None moves it to the root (sent as JSON null)."""
        body = {"folderId": folder_id}
        return self._request("PUT", routes.FILE.format(id=_require_id(file_id)), json=body)

    def delete_file(self, file_id: str) -> Any:
        """Soft delete: the file moves to the trash."""
        return self._request("DELETE", routes.FILE.format(id=_require_id(file_id)))

    def upload_file(
        self,
        local_path: str,
        *,
        folder_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Any:
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")
        if not os.path.isfile(local_path):
            raise InvalidArgumentError(
                "local_path does not point to a file",
                details={"local_path": local_path},
            )

        filename = name if name is not None else os.path.basename(local_path)
        mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        data = _drop_none({"folderId": folder_id})

        with open(local_path, "rb") as f:
            return self._request(
                "POST",
                routes.FILE_UPLOAD,
                files={"file": (filename, f, mime_type)},
                data=data,
            )

    # ----------------------------
    # Folders
    # ----------------------------
    def list_folders(
        self,
        *,
        parent_id: Optional[str] = None,
        include_files: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Any:
        params = {"parentId": parent_id, "includeFiles": include_files, "search": search}
        return self._request("GET", routes.FOLDERS, params=params)

    def create_folder(self, name: str, *, parent_id: Optional[str] = None) -> Any:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("folder name must be a non-empty string")
        body = _drop_none({"name": name.strip(), "parentId": parent_id})
        return self._request("POST", routes.FOLDERS, json=body)

    def get_folder(self, folder_id: str) -> Any:
        return self._request("GET", routes.FOLDER.format(id=_require_id(folder_id)))

    def update_folder(
        self,
        folder_id: str,
        *,
        name: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> Any:
        body = _drop_none({"name": name, "parentId": parent_id})
        return self._request("PUT", routes.FOLDER.format(id=_require_id(folder_id)), json=body)

    def move_folder(self, folder_id: str, parent_id: Optional[str]) -> Any:
        """Move a folder; parent_id None moves it to the root (sent as JSON null)."""
        body = {"parentId": parent_id}
        return self._request("PUT", routes.FOLDER.format(id=_require_id(folder_id)), json=body)

    def delete_folder(self, folder_id: str) -> Any:
        """Soft delete: the folder moves to the trash."""
        return self._request("DELETE", routes.FOLDER.format(id=_require_id(folder_id)))

    # ----------------------------
    # Trash
    # ----------------------------
    def list_trash(
        self,
        kind: str = "all",
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Any:
        _require_kind(kind, routes.TRASH_KINDS)
        params = {"type": kind, "page": page, "limit": limit}
        return self._request("GET", routes.TRASH, params=params)

    def restore_item(self, kind: str, item_id: str) -> Any:
        _require_kind(kind, routes.ITEM_KINDS)
        path = routes.TRASH_RESTORE.format(kind=kind, id=_require_id(item_id))
        return self._request("POST", path)

    def permanently_delete_item(self, kind: str, item_id: str) -> Any:
        _require_kind(kind, routes.ITEM_KINDS)
        path = routes.TRASH_ITEM.format(kind=kind, id=_require_id(item_id))
        return self._request("DELETE", path)

    # ----------------------------
    # Sharing
    # ----------------------------
    def share_file(
        self,
        file_id: str,
        *,
        permission: str = "VIEW",
        expires_days: Optional[int] = None,
        allow_download: Optional[bool] = None,
        password: Optional[str] = None,
    ) -> Any:
        _require_kind(permission, routes.SHARE_PERMISSIONS)
        body = _drop_none(
            {
                "permission": routes.FILE_SHARE_PERMISSION[permission],
                "expiryDays": expires_days if expires_days is not None
                else routes.DEFAULT_SHARE_EXPIRY_DAYS,
                "allowDownload": True if allow_download is None else allow_download,
                "password": password,
            }
        )
        return self._request("POST", routes.SHARE_FILE.format(id=_require_id(file_id)), json=body)

    def share_folder(
        self,
        folder_id: str,
        *,
        permission: str = "VIEW",
        expires_days: Optional[int] = None,
        password: Optional[str] = None,
    ) -> Any:
        _require_kind(permission, routes.SHARE_PERMISSIONS)
        body = _drop_none(
            {
                "permission": routes.FOLDER_SHARE_PERMISSION[permission],
                "expiryDays": expires_days if expires_days is not None
                else routes.DEFAULT_SHARE_EXPIRY_DAYS,
                "password": password,
            }
        )
        path = routes.SHARE_FOLDER.format(id=_require_id(folder_id))
        return self._request("POST", path, json=body)

    def get_shared_item(self, token: str, *, password: Optional[str] = None) -> Any:
        path = routes.SHARED_ITEM.format(token=_require_id(token))
        return self._request("GET", path, params={"password": password})

    def revoke_share(self, item_id: str, kind: str) -> Any:
        _require_kind(kind, routes.ITEM_KINDS)
        path = routes.SHARE.format(id=_require_id(item_id))
        return self._request("DELETE", path, params={"type": kind})

    def list_my_shares(self, *, page: Optional[int] = None, limit: Optional[int] = None) -> Any:
        return self._request("GET", routes.MY_SHARES, params={"page": page, "limit": limit})

    # ----------------------------
    # Search
    # ----------------------------
    def search(
        self,
        query: str,
        *,
        kind: str = "all",
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
    ) -> SearchResult:
        _require_kind(kind, routes.TRASH_KINDS)
        params = {
            "q": query,
            "type": kind,
            "page": page,
            "limit": limit,
            "sort": sort,
            "order": order,
        }
        raw = self._request("GET", routes.SEARCH, params=params)
        return _search_result(raw)

    def search_suggestions(self, query: str, *, limit: Optional[int] = None) -> SearchResult:
        """Suggestion strings plus a handful of quick results for the query."""
        raw_suggestions = self._request(
            "GET",
            routes.SEARCH_SUGGESTIONS,
            params={"q": query, "limit": limit},
        )
        quick = self.search(query, limit=5, sort="relevance", order="desc")

        body = unwrap(raw_suggestions)
        suggestions = body.get("suggestions") if isinstance(body, dict) else None
        quick.suggestions = [s for s in suggestions or [] if isinstance(s, str)]
        return quick

    # ----------------------------
    # Internals
    # ----------------------------
    def _auth_headers(self) -> dict[str, str]:
        if self._auth_info is None or self._auth_info.is_expired():
            return {}
        return {"Authorization": f"Bearer {self._auth_info.access_token}"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        **kwargs: Any,
    ) -> Any:
        try:
            response = self._http.request(
                method,
                path,
                params=_drop_none(params or {}),
                headers=self._auth_headers(),
                **kwargs,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            mapped: DriveViewError = _status_error(exc)
        except httpx.TransportError as exc:
            mapped = NetworkError(
                NETWORK_ERROR_MESSAGE,
                details={"method": method, "path": path},
                cause=exc,
            )
        except httpx.HTTPError as exc:
            mapped = ApiError(
                UNEXPECTED_ERROR_MESSAGE,
                details={"status_code": -1, "method": method, "path": path},
                cause=exc,
            )
        else:
            return _decode_body(response)

        logger.debug("request failed", extra={"method": method, "path": path, "error": describe_error(mapped)})
        raise mapped from mapped.cause


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(
            "Backend returned a non-JSON response",
            details={
                "status_code": response.status_code,
                "content_type": response.headers.get("content-type"),
            },
            cause=exc,
        ) from exc


def _status_error(exc: httpx.HTTPStatusError) -> ApiError:
    info = _http_error_to_info(exc.response)
    return map_http_error(info, cause=exc)


def _http_error_to_info(response: httpx.Response) -> HttpErrorInfo:
    """
    Extract message, reason and details from an error body.

    Message lookup order: error.message, message. Details: error.details,
    else the whole body.
    """
    body: Any = None
    try:
        body = response.json() if response.content else None
    except ValueError:
        body = None

    message: Optional[str] = None
    reason: Optional[str] = response.reason_phrase or None
    details: dict[str, Any] = {}

    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict):
            message = err.get("message") if isinstance(err.get("message"), str) else None
            if isinstance(err.get("code"), str):
                reason = err["code"]
            err_details = err.get("details")
        else:
            err_details = None
        if message is None and isinstance(body.get("message"), str):
            message = body["message"]
        if isinstance(body.get("code"), str):
            reason = body["code"]
        details["body"] = err_details if err_details is not None else body
    elif body is not None:
        details["body"] = body

    return HttpErrorInfo(
        status_code=response.status_code,
        reason=reason,
        message=message or DEFAULT_ERROR_MESSAGE,
        details=details or None,
    )


def _search_result(raw: Any) -> SearchResult:
    """Search responses carry mixed records under `results`, tagged by `type`."""
    results = extract_records(raw)
    body = unwrap(raw)
    total = None
    if isinstance(body, dict) and isinstance(body.get("pagination"), dict):
        total = body["pagination"].get("total")

    return SearchResult(
        files=to_file_items(r for r in results if r.get("type") == "file"),
        folders=to_folder_items(r for r in results if r.get("type") == "folder"),
        total=total if isinstance(total, int) else len(results),
    )


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def _require_id(value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError("id must be a non-empty string")
    return value


def _require_kind(value: str, allowed: frozenset[str]) -> None:
    if value not in allowed:
        raise InvalidArgumentError(
            f"unsupported value {value!r}",
            details={"allowed": sorted(allowed)},
        )


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
