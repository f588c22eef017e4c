"""DriveBrowser: view state over the storage backend (live, trash, starred, ...)."""

from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional, Sequence, TypeVar

from driveview.auth import AuthInfo
from driveview.config import ClientConfig
from driveview.controller import DriveApiClient
from driveview.errors import (
    DriveViewError,
    InvalidArgumentError,
    InvalidStateError,
    LoadError,
    describe_error,
)
from driveview.hierarchy import (
    ROOT,
    StarOverlay,
    count_children,
    extract_records,
    extract_share_targets,
    navigate,
    split_by_kind,
    to_file_items,
    to_folder_items,
    unwrap,
    with_item_counts,
)
from driveview.models import (
    FileItem,
    FolderItem,
    Item,
    Listing,
    SearchResult,
    StorageInfo,
)
from driveview.storage import JsonFileStore, UserPreferences

logger = logging.getLogger(__name__)

View = Literal["home", "folder", "trash", "starred", "recent", "shared", "search"]

T = TypeVar("T")

RECENT_LIMIT = 100


@dataclass(frozen=True)
class _Settled:
    """Outcome of one of several requests issued together."""

    value: Any = None
    error: Optional[DriveViewError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _settle(func: Callable[[], Any]) -> _Settled:
    try:
        return _Settled(value=func())
    except DriveViewError as exc:
        return _Settled(error=exc)


class DriveBrowser:
    """
    Client-side state of the file browser.

    Notes:
        - Every view is re-derived from the latest fetch plus the star
          overlay; fetched records are kept with their backend flags and
          the overlay is merged when `listing` is read.
        - Live folders are fetched from the backend on entry. The trash is
          fetched once on entry and navigated locally.
        - Loads are not cancelled or sequenced: whichever load finishes
          last defines the view.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        auth_info: Optional[AuthInfo] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._client = DriveApiClient(self._config, auth_info)
        self._store: Optional[JsonFileStore] = None
        self._reset_state()

    @classmethod
    def from_client(
        cls,
        client: DriveApiClient,
        *,
        preferences: Optional[UserPreferences] = None,
        store: Optional[JsonFileStore] = None,
    ) -> "DriveBrowser":
        """Create a browser with an injected API client (useful for tests)."""
        obj = cls.__new__(cls)
        obj._config = ClientConfig()
        obj._client = client
        obj._store = store
        obj._reset_state()
        if preferences is not None:
            obj._attach_preferences(preferences)
        return obj

    def _reset_state(self) -> None:
        self._user: Optional[dict[str, Any]] = None
        self._preferences: Optional[UserPreferences] = None
        self._overlay = StarOverlay()
        self._view: View = "home"
        self._current_folder: Optional[FolderItem] = None
        self._files: list[FileItem] = []
        self._folders: list[FolderItem] = []
        self._trash_files: list[FileItem] = []
        self._trash_folders: list[FolderItem] = []
        self._trash_loaded = False

    # ----------------------------
    # Session
    # ----------------------------
    def start_session(self) -> dict[str, Any]:
        """
        Fetch the current user and open their namespaced local state.

        Legacy un-namespaced keys are migrated here, once per session start.
        """
        body = unwrap(self._client.get_current_user())
        user = body.get("user") if isinstance(body, dict) else None
        if not isinstance(user, dict) or user.get("id") in (None, ""):
            raise InvalidStateError("Backend did not return the current user")

        if self._store is None:
            self._store = JsonFileStore(self._config.state_file)
        self._attach_preferences(UserPreferences.open(self._store, str(user["id"])))
        self._user = user

        server_plan = user.get("plan")
        if isinstance(server_plan, str) and server_plan:
            try:
                self.preferences.plan = server_plan
            except ValueError:
                logger.warning("backend reported an unknown plan", extra={"plan": server_plan})
        return user

    def _attach_preferences(self, preferences: UserPreferences) -> None:
        self._preferences = preferences
        self._overlay = StarOverlay(preferences)

    @property
    def user(self) -> Optional[dict[str, Any]]:
        return self._user

    @property
    def preferences(self) -> UserPreferences:
        if self._preferences is None:
            raise InvalidStateError("No session. Call start_session() first.")
        return self._preferences

    @property
    def overlay(self) -> StarOverlay:
        return self._overlay

    @property
    def client(self) -> DriveApiClient:
        return self._client

    # ----------------------------
    # View state
    # ----------------------------
    @property
    def view(self) -> View:
        return self._view

    @property
    def in_trash(self) -> bool:
        return self._view == "trash"

    @property
    def current_folder(self) -> Optional[FolderItem]:
        return self._current_folder

    @property
    def listing(self) -> Listing:
        """The visible level with the effective starred flag applied."""
        return Listing(
            files=self._overlay.effective(self._files),
            folders=self._overlay.effective(self._folders),
        )

    @property
    def trash(self) -> Listing:
        """The whole loaded trash collection (empty outside the trash view)."""
        return Listing(files=list(self._trash_files), folders=list(self._trash_folders))

    def _show(
        self,
        view: View,
        files: Sequence[FileItem],
        folders: Sequence[FolderItem],
        *,
        folder: Optional[FolderItem] = None,
    ) -> Listing:
        if view != "trash":
            self._trash_files = []
            self._trash_folders = []
            self._trash_loaded = False
        self._view = view
        self._current_folder = folder
        self._files = list(files)
        self._folders = list(folders)
        return self.listing

    # ----------------------------
    # Live hierarchy
    # ----------------------------
    def open_root(self) -> Listing:
        return self.load_folder(None)

    def open_folder(self, folder: FolderItem) -> Listing:
        """Drill into a folder: local inside the trash, a fetch otherwise."""
        if self.in_trash:
            return self.open_trash_folder(folder)
        return self.load_folder(folder.id, folder=folder)

    def load_folder(
        self,
        folder_id: Optional[str],
        *,
        folder: Optional[FolderItem] = None,
    ) -> Listing:
        """
        Fetch one level of the live hierarchy.

        Files and folders are requested in parallel. If one side fails the
        other is still shown; a failing folders request is retried once
        without `includeFiles`. Only when both sides fail is LoadError
        raised.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            files_future = pool.submit(_settle, lambda: self._client.list_files(folder_id=folder_id))
            folders_future = pool.submit(
                _settle,
                lambda: self._client.list_folders(parent_id=folder_id, include_files=True),
            )
            files_res = files_future.result()
            folders_res = folders_future.result()

        if not files_res.ok:
            logger.warning(
                "files request failed, continuing with folders",
                extra={"folder_id": folder_id, "error": describe_error(files_res.error)},  # type: ignore[arg-type]
            )

        if not folders_res.ok:
            logger.warning(
                "folders request with includeFiles failed, retrying without it",
                extra={"folder_id": folder_id, "error": describe_error(folders_res.error)},  # type: ignore[arg-type]
            )
            folders_res = _settle(lambda: self._client.list_folders(parent_id=folder_id))
            if not folders_res.ok:
                logger.error(
                    "folders retry failed",
                    extra={"folder_id": folder_id, "error": describe_error(folders_res.error)},  # type: ignore[arg-type]
                )

        if not files_res.ok and not folders_res.ok:
            raise self._load_failed(
                "Both files and folders requests failed",
                files_error=files_res.error,
                folders_error=folders_res.error,
                folder_id=folder_id,
            )

        files = _assume_parent(
            to_file_items(extract_records(files_res.value, "file")), folder_id
        )
        folders = _assume_parent(
            to_folder_items(extract_records(folders_res.value, "folder")), folder_id
        )
        level = navigate(files, folders, folder_id if folder_id else ROOT, scope="live")

        view: View = "folder" if folder_id else "home"
        if folder is None and folder_id:
            folder = FolderItem(id=folder_id, name="")
        return self._show(view, level.files, level.folders, folder=folder)

    def refresh(self) -> Listing:
        """Reload whatever view is showing."""
        if self._view == "trash":
            return self.load_trash()
        if self._view == "starred":
            return self.load_starred()
        if self._view == "recent":
            return self.load_recent()
        if self._view == "shared":
            return self.load_shared_by_me()
        folder = self._current_folder
        return self.load_folder(folder.id if folder else None, folder=folder)

    # ----------------------------
    # Trash
    # ----------------------------
    def load_trash(self) -> Listing:
        """
        Fetch the whole trash and show its root (every trashed item).

        Files and folders are requested separately; if either request fails
        a single `type=all` request is made and split by kind heuristics.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            files_future = pool.submit(_settle, lambda: self._client.list_trash("file"))
            folders_future = pool.submit(_settle, lambda: self._client.list_trash("folder"))
            files_res = files_future.result()
            folders_res = folders_future.result()

        if files_res.ok and folders_res.ok:
            file_records = extract_records(files_res.value)
            folder_records = extract_records(folders_res.value)
        else:
            failed = files_res.error or folders_res.error
            logger.warning(
                "per-kind trash request failed, falling back to type=all",
                extra={"error": describe_error(failed)},  # type: ignore[arg-type]
            )
            all_res = _settle(lambda: self._client.list_trash("all"))
            if not all_res.ok:
                raise self._load_failed(
                    "Failed to load trash",
                    files_error=files_res.error,
                    folders_error=folders_res.error,
                    all_error=all_res.error,
                )
            file_records, folder_records = split_by_kind(extract_records(all_res.value))

        files = to_file_items(file_records)
        folders = to_folder_items(folder_records)
        self._trash_files = files
        self._trash_folders = with_item_counts(folders, count_children([*files, *folders]))
        self._trash_loaded = True

        logger.debug(
            "trash loaded",
            extra={
                "files": len(files),
                "folders": len(folders),
                "with_parent": sum(1 for it in [*files, *folders] if it.parent_id),
            },
        )
        return self.open_trash_folder(None)

    def open_trash_folder(self, folder: Optional[FolderItem | str]) -> Listing:
        """Navigate inside the loaded trash; performs no request."""
        if not self._trash_loaded:
            raise InvalidStateError("Trash is not loaded. Call load_trash() first.")

        folder_item: Optional[FolderItem]
        if isinstance(folder, str):
            folder_item = next((fo for fo in self._trash_folders if fo.id == folder), None)
            folder_item = folder_item or FolderItem(id=folder, name="")
        else:
            folder_item = folder

        parent = folder_item.id if folder_item is not None else ROOT
        level = navigate(self._trash_files, self._trash_folders, parent, scope="trash")
        return self._show("trash", level.files, level.folders, folder=folder_item)

    def leave_trash(self) -> Listing:
        """Discard the trash collection and return to the live root."""
        self._trash_files = []
        self._trash_folders = []
        self._trash_loaded = False
        return self.open_root()

    # ----------------------------
    # Other views
    # ----------------------------
    def load_starred(self) -> Listing:
        """
        All files and folders whose effective starred flag is set.

        The fetched items are kept unmerged; unstarring one here shows it
        as unstarred until the next reload.
        """
        files_raw = self._client.list_files()
        folders_raw = self._client.list_folders(include_files=False)
        files = self._overlay.starred_only(to_file_items(extract_records(files_raw, "file")))
        folders = self._overlay.starred_only(
            to_folder_items(extract_records(folders_raw, "folder"))
        )
        return self._show("starred", files, folders)

    def load_recent(self) -> Listing:
        raw = self._client.list_files(sort_by="updatedAt", sort_order="desc", limit=RECENT_LIMIT)
        return self._show("recent", to_file_items(extract_records(raw, "file")), [])

    def load_shared_by_me(self) -> Listing:
        targets = extract_share_targets(self._client.list_my_shares())
        file_records, folder_records = split_by_kind(targets)
        return self._show("shared", to_file_items(file_records), to_folder_items(folder_records))

    def search(self, query: str, *, kind: str = "all") -> SearchResult:
        """Run a search, show its results and remember the query."""
        if not isinstance(query, str) or not query.strip():
            raise InvalidArgumentError("search query must be a non-empty string")
        result = self._client.search(query.strip(), kind=kind)
        if self._preferences is not None:
            self._preferences.add_recent_search(query)
        self._show("search", result.files, result.folders)
        return result

    # ----------------------------
    # Mutations
    # ----------------------------
    def toggle_star(self, item: Item) -> bool:
        """
        Flip the local starred override of item; returns the new effective flag.

        Optimistic and local only: no backend call is made.
        """
        if not item.id:
            raise InvalidArgumentError("item has no id")
        self._overlay.toggle(item.id)
        return self._overlay.is_starred(item)

    def create_folder(self, name: str, *, parent_id: Optional[str] = None) -> Optional[FolderItem]:
        target = parent_id if parent_id is not None else self._current_folder_id()
        created = self._client.create_folder(name, parent_id=target)
        record = _created_record(created, "folder")
        self.refresh()
        return to_folder_items([record])[0] if record else None

    def upload(self, local_path: str, *, name: Optional[str] = None) -> Optional[FileItem]:
        created = self._client.upload_file(
            local_path,
            folder_id=self._current_folder_id(),
            name=name,
        )
        record = _created_record(created, "file")
        self.refresh()
        return to_file_items([record])[0] if record else None

    def rename(self, item: Item, new_name: str) -> None:
        if not isinstance(new_name, str) or not new_name.strip():
            raise InvalidArgumentError("new name must be a non-empty string")
        if new_name == item.name:
            return
        if item.kind == "file":
            self._client.update_file(item.id, name=new_name)
        else:
            self._client.update_folder(item.id, name=new_name)
        self.refresh()

    def move(self, item: Item, target_folder_id: Optional[str]) -> None:
        """Move item under target_folder_id (None moves it to the root)."""
        if item.kind == "folder" and target_folder_id == item.id:
            raise InvalidArgumentError("cannot move a folder into itself")
        if item.kind == "file":
            self._client.move_file(item.id, target_folder_id)
        else:
            self._client.move_folder(item.id, target_folder_id)
        self.refresh()

    def delete(self, item: Item) -> None:
        """Soft delete (move to trash)."""
        if item.kind == "file":
            self._client.delete_file(item.id)
        else:
            self._client.delete_folder(item.id)
        self.refresh()

    def restore(self, item: Item) -> None:
        self._client.restore_item(item.kind, item.id)
        self.refresh()

    def delete_permanently(self, item: Item) -> None:
        self._client.permanently_delete_item(item.kind, item.id)
        if self.in_trash:
            self.load_trash()
        else:
            self.refresh()

    def share(
        self,
        item: Item,
        *,
        permission: str = "VIEW",
        expires_days: Optional[int] = None,
        password: Optional[str] = None,
    ) -> Any:
        if item.kind == "file":
            return self._client.share_file(
                item.id,
                permission=permission,
                expires_days=expires_days,
                password=password,
            )
        return self._client.share_folder(
            item.id,
            permission=permission,
            expires_days=expires_days,
            password=password,
        )

    def revoke_share(self, item: Item) -> Any:
        return self._client.revoke_share(item.id, item.kind)

    # ----------------------------
    # Account
    # ----------------------------
    def storage_info(self) -> StorageInfo:
        """Usage from the backend, quota from the plan."""
        reported = self._client.get_storage_info()
        plan = self._preferences.plan if self._preferences is not None else "free"
        return StorageInfo.for_plan(reported.used, plan)

    def set_plan(self, plan: str) -> None:
        """Record the plan chosen in the (simulated) upgrade flow."""
        self.preferences.plan = plan

    # ----------------------------
    # Internals
    # ----------------------------
    def _current_folder_id(self) -> Optional[str]:
        if self.in_trash:
            raise InvalidStateError("Cannot add items while browsing the trash")
        return self._current_folder.id if self._current_folder else None

    def _load_failed(self, message: str, **errors: Any) -> LoadError:
        details = {
            name: describe_error(err) if isinstance(err, BaseException) else err
            for name, err in errors.items()
        }
        logger.error(message, extra={"details": details})
        return LoadError(message, details=details)


def _assume_parent(items: list[T], folder_id: Optional[str]) -> list[T]:
    """
    Records fetched for a folder belong to it even when they omit the
    parent reference.
    """
    if not folder_id:
        return items
    return [
        item if item.parent_id else dataclasses.replace(item, parent_id=folder_id)  # type: ignore[attr-defined]
        for item in items
    ]


def _created_record(payload: Any, kind: str) -> Optional[dict[str, Any]]:
    body = unwrap(payload)
    if isinstance(body, dict):
        nested = body.get(kind)
        if isinstance(nested, dict):
            return nested
        if body.get("id") is not None:
            return body
    return None
