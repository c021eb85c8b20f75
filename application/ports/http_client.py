# application/ports/http_client.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from application.services.body_encoder import RequestPayload


class HttpTransportError(Exception):
    """Transport-level failure (DNS, connect, TLS, timeout). `message` is display-ready."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class HttpResponse:
    status: int
    reason: str
    url: str  # after redirects
    text: str
    # raw header lines; a repeated header appears once per value
    headers: List[Tuple[str, str]] = field(default_factory=list)


class HttpClientPort(ABC):
    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[RequestPayload] = None,
    ) -> HttpResponse:
        ...
