# infrastructure/history/in_memory_history_store.py
from __future__ import annotations

from threading import Lock
from typing import List, Sequence

from application.ports.history_store import HistoryStorePort
from application.services.history_service import HISTORY_CAPACITY, append_history
from domain.request import ApiRequest


class InMemoryHistoryStore(HistoryStorePort):
    """History shared by concurrent API requests; one writer at a time keeps FIFO order."""

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        self._items: List[ApiRequest] = []
        self._capacity = capacity
        self._lock = Lock()

    def append(self, snapshot: ApiRequest) -> List[ApiRequest]:
        with self._lock:
            self._items = append_history(self._items, snapshot, self._capacity)
            return list(self._items)

    def list(self) -> List[ApiRequest]:
        with self._lock:
            return list(self._items)

    def replace_all(self, snapshots: Sequence[ApiRequest]) -> None:
        with self._lock:
            items = list(snapshots)
            self._items = items[-self._capacity :] if len(items) > self._capacity else items

    def clear(self) -> None:
        with self._lock:
            self._items = []
