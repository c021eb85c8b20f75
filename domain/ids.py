# domain/ids.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass
class RequestIdSequence:
    """Monotonic request ids scoped to one request collection."""
    last: int = 0

    @classmethod
    def after(cls, ids: Iterable[int]) -> "RequestIdSequence":
        return cls(last=max(ids, default=0))

    def next(self) -> int:
        self.last += 1
        return self.last

    def observe(self, request_id: int) -> None:
        if request_id > self.last:
            self.last = request_id
