"""Durable JSON key-value store backing the client-only state."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Optional

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    String-keyed store persisted as a single JSON object.

    Every mutation rewrites the file (temp file + os.replace), so a value
    set before an unexpected exit is not lost. A missing file is an empty
    store; an unreadable one is logged and treated as empty.
    """

    def __init__(self, path: str) -> None:
        if not path or not isinstance(path, str):
            raise ValueError("path must be a non-empty string")
        self._path = path
        self._data: dict[str, Any] = self._load()

    @property
    def path(self) -> str:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return list(self._data)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._flush()

    def _load(self) -> dict[str, Any]:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning(
                "local state file is unreadable, starting empty",
                extra={"path": self._path, "error": repr(exc)},
            )
            return {}
        if not isinstance(data, dict):
            logger.warning("local state file is not an object, starting empty", extra={"path": self._path})
            return {}
        return data

    def _flush(self) -> None:
        directory = os.path.dirname(self._path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory or None, prefix=".state-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_path, self._path)
        except BaseException:
            _remove_quietly(tmp_path)
            raise


class NamespacedStore:
    """
    View of a JsonFileStore with keys suffixed by the user id.

    Switching users on the same machine must not leak one user's overlay or
    plan into another session.
    """

    def __init__(self, store: JsonFileStore, user_id: str) -> None:
        if not user_id:
            raise ValueError("user_id must be a non-empty string")
        self._store = store
        self.user_id = str(user_id)

    def key_for(self, key: str) -> str:
        return f"{key}_{self.user_id}"

    def get(self, key: str, default: Any = None) -> Any:
        return self._store.get(self.key_for(key), default)

    def set(self, key: str, value: Any) -> None:
        self._store.set(self.key_for(key), value)

    def delete(self, key: str) -> None:
        self._store.delete(self.key_for(key))

    def migrate_legacy(self, key: str) -> Optional[Any]:
        """
        Move an un-namespaced legacy value under this user's key.

        Runs only when the legacy key exists and the namespaced one does
        not; the legacy key is removed afterwards. Returns the migrated
        value, or None if nothing was migrated.
        """
        if key not in self._store or self.key_for(key) in self._store:
            return None
        value = self._store.get(key)
        self._store.set(self.key_for(key), value)
        self._store.delete(key)
        logger.info("migrated legacy local key", extra={"key": key, "user_id": self.user_id})
        return value


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        pass
