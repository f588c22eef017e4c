"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_API_URL = "http://localhost:5050/api/v1"
DEFAULT_TIMEOUT_SEC = 30.0
DEFAULT_STATE_DIR = os.path.join("~", ".driveview")
STATE_FILE_NAME = "state.json"

ENV_API_URL = "DRIVEVIEW_API_URL"
ENV_TIMEOUT = "DRIVEVIEW_TIMEOUT"
ENV_STATE_DIR = "DRIVEVIEW_STATE_DIR"


@dataclass(slots=True, frozen=True)
class ClientConfig:
    """
    Settings shared by the API client and the local state store.

    api_url:
        Backend base URL including the version prefix, e.g.
        "https://files.example.com/api/v1". A trailing slash is ignored.
    timeout_sec:
        Per-request timeout; a request exceeding it fails with NetworkError.
    state_dir:
        Directory holding the persisted client-only state.
    """

    api_url: str = DEFAULT_API_URL
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    state_dir: str = field(default=DEFAULT_STATE_DIR)

    def __post_init__(self) -> None:
        if not isinstance(self.api_url, str) or not self.api_url.strip():
            raise ValueError("ClientConfig.api_url must be a non-empty string")
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError("ClientConfig.api_url must be an absolute http(s) URL")
        if not isinstance(self.timeout_sec, (int, float)) or self.timeout_sec <= 0:
            raise ValueError("ClientConfig.timeout_sec must be a positive number")
        if not isinstance(self.state_dir, str) or not self.state_dir.strip():
            raise ValueError("ClientConfig.state_dir must be a non-empty string")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        env = os.environ if environ is None else environ

        timeout = DEFAULT_TIMEOUT_SEC
        raw_timeout = env.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ValueError(f"{ENV_TIMEOUT} must be a number, got {raw_timeout!r}") from exc

        return cls(
            api_url=env.get(ENV_API_URL) or DEFAULT_API_URL,
            timeout_sec=timeout,
            state_dir=env.get(ENV_STATE_DIR) or DEFAULT_STATE_DIR,
        )

    @property
    def base_url(self) -> str:
        return self.api_url.rstrip("/")

    @property
    def state_file(self) -> str:
        return os.path.join(os.path.expanduser(self.state_dir), STATE_FILE_NAME)
