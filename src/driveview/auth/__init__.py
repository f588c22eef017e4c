"""Public auth exports for driveview."""

from __future__ import annotations

from .auth_info import AuthInfo
from .token import is_token_expired, parse_jwt

__all__ = ["AuthInfo", "is_token_expired", "parse_jwt"]
