# application/services/auth_resolver.py
from __future__ import annotations

from typing import Callable, Optional

from domain.auth import AuthConfig, AuthPlacement, AuthLocation, AuthType

Resolve = Callable[[str], str]

AUTHORIZATION = "Authorization"


def effective_auth(request_auth: Optional[AuthConfig], global_auth: Optional[AuthConfig]) -> Optional[AuthConfig]:
    """Request auth first, then the global fallback. None when neither applies."""
    if request_auth is not None and request_auth.type != AuthType.NONE:
        return request_auth
    if global_auth is not None and global_auth.type != AuthType.NONE:
        return global_auth
    return None


def resolve_auth(
    request_auth: Optional[AuthConfig],
    global_auth: Optional[AuthConfig],
    resolver: Resolve = lambda s: s,
) -> Optional[AuthPlacement]:
    auth = effective_auth(request_auth, global_auth)
    if auth is None:
        return None

    token = resolver(auth.token or "")

    if auth.type == AuthType.BEARER:
        return AuthPlacement(location=AuthLocation.HEADER, name=AUTHORIZATION, value=f"Bearer {token}")

    if auth.type == AuthType.API_KEY:
        key_name = resolver(auth.key_name or "").strip()
        if not key_name:
            # api-key without a key name contributes nothing
            return None
        return AuthPlacement(location=auth.effective_location, name=key_name, value=token)

    return None
