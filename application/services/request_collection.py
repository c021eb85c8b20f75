# application/services/request_collection.py
from __future__ import annotations

from dataclasses import replace
from threading import RLock
from typing import List, Optional, Set

from domain.exceptions import ValidationError
from domain.ids import RequestIdSequence
from domain.request import ApiRequest, DEFAULT_REQUEST_NAME


class RequestCollection:
    """
    The open requests (tabs) and which one is active.

    Requests are immutable values; every edit replaces the stored value.
    A request id is marked pending while its dispatch is outstanding so the
    caller can refuse a second send of the same request. Safe to share between
    worker threads.
    """

    def __init__(self, requests: Optional[List[ApiRequest]] = None, active_id: Optional[int] = None):
        self._lock = RLock()
        self._requests: List[ApiRequest] = list(requests or [])
        self._ids = RequestIdSequence.after(r.id for r in self._requests)
        self._pending: Set[int] = set()
        self.active_id = active_id if active_id is not None and self.get(active_id) else None

    @property
    def requests(self) -> List[ApiRequest]:
        with self._lock:
            return list(self._requests)

    def get(self, request_id: int) -> Optional[ApiRequest]:
        with self._lock:
            for r in self._requests:
                if r.id == request_id:
                    return r
            return None

    def require(self, request_id: int) -> ApiRequest:
        request = self.get(request_id)
        if request is None:
            raise ValidationError(f"Request not found: {request_id}")
        return request

    def new_request(self, template: Optional[ApiRequest] = None) -> ApiRequest:
        """Open a new tab, blank or copied from `template` (e.g. a history snapshot)."""
        with self._lock:
            new_id = self._ids.next()
            if template is None:
                request = ApiRequest(id=new_id, name=DEFAULT_REQUEST_NAME)
            else:
                request = replace(template, id=new_id, response=None, sent_at=None)
            self._requests.append(request)
            self.active_id = new_id
            return request

    def replace(self, request: ApiRequest) -> ApiRequest:
        if not self.replace_if_open(request):
            raise ValidationError(f"Request not found: {request.id}")
        return request

    def replace_if_open(self, request: ApiRequest) -> bool:
        """Store `request` over the open request with its id; False when it was closed."""
        with self._lock:
            for i, r in enumerate(self._requests):
                if r.id == request.id:
                    self._requests[i] = request
                    return True
            return False

    def rename(self, request_id: int, name: str) -> ApiRequest:
        with self._lock:
            return self.replace(self.require(request_id).with_name(name))

    def close(self, request_id: int) -> None:
        with self._lock:
            self._requests = [r for r in self._requests if r.id != request_id]
            self._pending.discard(request_id)
            if self.active_id == request_id:
                self.active_id = self._requests[-1].id if self._requests else None

    def extend(self, requests: List[ApiRequest], active_id: Optional[int]) -> None:
        with self._lock:
            for r in requests:
                self._ids.observe(r.id)
            self._requests.extend(requests)
            if active_id is not None:
                self.active_id = active_id

    def try_mark_pending(self, request_id: int) -> bool:
        """Mark `request_id` as being sent. False when it already was."""
        with self._lock:
            if request_id in self._pending:
                return False
            self._pending.add(request_id)
            return True

    def clear_pending(self, request_id: int) -> None:
        with self._lock:
            self._pending.discard(request_id)
