# application/services/history_service.py
from __future__ import annotations

from typing import List, Sequence

from domain.request import ApiRequest

HISTORY_CAPACITY = 50


def append_history(
    history: Sequence[ApiRequest],
    snapshot: ApiRequest,
    capacity: int = HISTORY_CAPACITY,
) -> List[ApiRequest]:
    """New history with `snapshot` appended; oldest entries are evicted past `capacity`."""
    out = list(history)
    out.append(snapshot)
    if len(out) > capacity:
        out = out[len(out) - capacity :]
    return out
