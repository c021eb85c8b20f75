# application/services/key_value_normalizer.py
from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple

from domain.key_value import KeyValueItem

Resolve = Callable[[str], str]


def _identity(text: str) -> str:
    return text


def normalize(items: Sequence[KeyValueItem], resolver: Resolve = _identity) -> List[Tuple[str, str]]:
    """
    Enabled rows as resolved (key, value) pairs, in list order.

    Disabled rows and rows whose resolved key is empty are dropped. Duplicate
    keys are kept; see `to_map` for last-wins folding.
    """
    pairs: List[Tuple[str, str]] = []
    for item in items or []:
        if not item.enabled:
            continue
        key = resolver(item.key or "")
        if not key.strip():
            continue
        pairs.append((key, resolver(item.value or "")))
    return pairs


def to_map(items: Sequence[KeyValueItem], resolver: Resolve = _identity) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, value in normalize(items, resolver):
        out[key] = value
    return out


def drop_header(headers: Dict[str, str], name: str) -> Dict[str, str]:
    """Copy of `headers` without any case variant of `name`."""
    lowered = name.lower()
    return {k: v for k, v in headers.items() if k.lower() != lowered}


def get_header(headers: Dict[str, str], name: str) -> str:
    lowered = name.lower()
    for k, v in headers.items():
        if k.lower() == lowered:
            return v
    return ""
