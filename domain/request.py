# domain/request.py
"""
Editable request model.

ApiRequest is immutable; the editor replaces it through the `with_*` helpers,
one per field group.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from domain.auth import AuthConfig
from domain.key_value import KeyValueItem, blank_rows
from domain.response_record import ResponseRecord

BODYLESS_METHODS = frozenset({"GET", "HEAD"})
DEFAULT_REQUEST_NAME = "New Request"


class BodyType(str, Enum):
    NONE = "none"
    JSON = "json"
    TEXT = "text"
    FORM_DATA = "form-data"
    FORM_URLENCODED = "x-www-form-urlencoded"


@dataclass(frozen=True)
class RequestBody:
    type: BodyType = BodyType.NONE
    content: str = ""  # json / text
    form_data: List[KeyValueItem] = field(default_factory=blank_rows)  # form types


@dataclass(frozen=True)
class ApiRequest:
    id: int
    name: str = DEFAULT_REQUEST_NAME
    method: str = "GET"
    url: str = ""
    params: List[KeyValueItem] = field(default_factory=blank_rows)
    headers: List[KeyValueItem] = field(default_factory=blank_rows)
    body: RequestBody = field(default_factory=RequestBody)
    auth: AuthConfig = field(default_factory=AuthConfig)
    response: Optional[ResponseRecord] = None
    sent_at: Optional[int] = None  # epoch millis

    def with_name(self, name: str) -> "ApiRequest":
        return replace(self, name=name)

    def with_method(self, method: str) -> "ApiRequest":
        return replace(self, method=method.upper())

    def with_url(self, url: str) -> "ApiRequest":
        return replace(self, url=url)

    def with_params(self, params: List[KeyValueItem]) -> "ApiRequest":
        return replace(self, params=list(params))

    def with_headers(self, headers: List[KeyValueItem]) -> "ApiRequest":
        return replace(self, headers=list(headers))

    def with_body(self, body: RequestBody) -> "ApiRequest":
        return replace(self, body=body)

    def with_auth(self, auth: AuthConfig) -> "ApiRequest":
        return replace(self, auth=auth)

    def with_response(self, response: Optional[ResponseRecord], sent_at: Optional[int]) -> "ApiRequest":
        return replace(self, response=response, sent_at=sent_at)
