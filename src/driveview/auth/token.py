from __future__ import annotations

import time
from typing import Any, Optional

from jose import JWTError, jwt


def parse_jwt(token: str) -> Optional[dict[str, Any]]:
    """
    Read the claims of a JWT without verifying its signature.

    Returns None when the token is not a well-formed JWT.
    """
    if not isinstance(token, str):
        return None
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    return dict(claims) if isinstance(claims, dict) else None


def is_token_expired(token: str, *, now: Optional[float] = None) -> bool:
    """A token without a readable `exp` claim is treated as expired."""
    claims = parse_jwt(token)
    if not claims:
        return True
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        return True
    current = time.time() if now is None else now
    return current >= exp
