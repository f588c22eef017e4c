"""Authentication information for driveview (bearer tokens only)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .token import is_token_expired, parse_jwt


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Tokens are issued by the external auth API; this library only carries
    them. data must include:
        - access_token
    and may include:
        - refresh_token
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind != "bearer":
            raise ValueError("AuthInfo.kind must be 'bearer'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        value = self.data.get("access_token")
        if not isinstance(value, str) or not value.strip():
            raise ValueError("AuthInfo.data['access_token'] must be a non-empty string")

    @classmethod
    def bearer(cls, access_token: str, refresh_token: Optional[str] = None) -> AuthInfo:
        data: dict[str, Any] = {"access_token": access_token}
        if refresh_token:
            data["refresh_token"] = refresh_token
        return cls(kind="bearer", data=data)

    @property
    def access_token(self) -> str:
        return str(self.data["access_token"])

    @property
    def refresh_token(self) -> Optional[str]:
        value = self.data.get("refresh_token")
        return value if isinstance(value, str) else None

    @property
    def user_id(self) -> Optional[str]:
        """Subject of the access token, if it is a readable JWT."""
        claims = parse_jwt(self.access_token)
        if not claims:
            return None
        sub = claims.get("sub") or claims.get("userId") or claims.get("id")
        return str(sub) if sub is not None else None

    def is_expired(self) -> bool:
        return is_token_expired(self.access_token)
