# application/services/body_encoder.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple
from urllib.parse import urlencode

from application.services.key_value_normalizer import normalize
from domain.request import BODYLESS_METHODS, BodyType, RequestBody

Resolve = Callable[[str], str]

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"
FORM_URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"


class PayloadKind(str, Enum):
    RAW = "raw"
    URLENCODED = "urlencoded"
    MULTIPART = "multipart"


@dataclass(frozen=True)
class RequestPayload:
    kind: PayloadKind
    text: Optional[str] = None
    # multipart only; the transport encodes them with its own boundary
    fields: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class BodyEncodeResult:
    payload: Optional[RequestPayload] = None
    content_type: Optional[str] = None
    drop_content_type: bool = False


class BodyEncoder:
    """
    Encode a RequestBody for the wire.

    - json / text: resolved `content` as a raw string, with a forced Content-Type
    - x-www-form-urlencoded: enabled form rows, resolved and URL-encoded
    - form-data: enabled form rows as multipart fields; the caller must remove
      any Content-Type so the transport can set its own boundary
    - GET / HEAD never carry a body, whatever the configured type
    """

    def encode(self, method: str, body: RequestBody, resolver: Resolve) -> BodyEncodeResult:
        if method.upper() in BODYLESS_METHODS:
            return BodyEncodeResult()

        if body.type == BodyType.JSON:
            return BodyEncodeResult(
                payload=RequestPayload(kind=PayloadKind.RAW, text=resolver(body.content or "")),
                content_type=JSON_CONTENT_TYPE,
            )

        if body.type == BodyType.TEXT:
            return BodyEncodeResult(
                payload=RequestPayload(kind=PayloadKind.RAW, text=resolver(body.content or "")),
                content_type=TEXT_CONTENT_TYPE,
            )

        if body.type == BodyType.FORM_URLENCODED:
            pairs = normalize(body.form_data, resolver)
            return BodyEncodeResult(
                payload=RequestPayload(kind=PayloadKind.URLENCODED, text=urlencode(pairs)),
                content_type=FORM_URLENCODED_CONTENT_TYPE,
            )

        if body.type == BodyType.FORM_DATA:
            pairs = normalize(body.form_data, resolver)
            return BodyEncodeResult(
                payload=RequestPayload(kind=PayloadKind.MULTIPART, fields=tuple(pairs)),
                drop_content_type=True,
            )

        return BodyEncodeResult()
