# application/services/redactor.py
from __future__ import annotations

from typing import Any, Dict

SENSITIVE_KEYS = {
    "password",
    "passwd",
    "pass",
    "token",
    "access_token",
    "api_key",
    "apikey",
    "api-key",
    "x-api-key",
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
}

MASK = "********"


def is_sensitive(key: str) -> bool:
    return key.lower() in SENSITIVE_KEYS


def mask_value(key: str, value: Any, extra_keys: frozenset = frozenset()) -> Any:
    if value is not None and (is_sensitive(key) or key.lower() in extra_keys):
        return MASK
    return value


def mask_dict(d: Dict[str, Any], extra_keys: frozenset = frozenset()) -> Dict[str, Any]:
    return {k: mask_value(k, v, extra_keys) for k, v in d.items()}
