# application/ports/history_store.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from domain.request import ApiRequest


class HistoryStorePort(ABC):
    @abstractmethod
    def append(self, snapshot: ApiRequest) -> List[ApiRequest]:
        """Append a dispatched request and return the history after eviction."""
        ...

    @abstractmethod
    def list(self) -> List[ApiRequest]:
        ...

    @abstractmethod
    def replace_all(self, snapshots: Sequence[ApiRequest]) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
