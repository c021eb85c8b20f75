# application/services/response_format.py
from __future__ import annotations

import math

_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(size: int, decimals: int = 2) -> str:
    if size <= 0:
        return "0 Bytes"
    k = 1024
    i = min(int(math.floor(math.log(size) / math.log(k))), len(_UNITS) - 1)
    value = round(size / k ** i, max(decimals, 0))
    # 1.50 -> 1.5, 2.00 -> 2
    text = f"{value:.{max(decimals, 0)}f}".rstrip("0").rstrip(".") if decimals > 0 else str(int(value))
    return f"{text} {_UNITS[i]}"


def status_category(status: int) -> str:
    if 200 <= status < 300:
        return "success"
    if 300 <= status < 400:
        return "redirect"
    if status >= 400:
        return "error"
    return "unknown"
