# application/services/dispatcher.py
from __future__ import annotations

import time
from typing import Callable, Dict, Iterable, Optional, Tuple

from application.ports.http_client import HttpClientPort, HttpTransportError
from application.ports.logger import LoggerPort, NullLogger
from application.services.key_value_normalizer import get_header
from application.services.request_compiler import CompiledRequest
from application.services.redactor import mask_dict
from domain.response_record import ResponseRecord


def flatten_headers(lines: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """
    Fold header lines into one value per name.

    Names compare case-insensitively and keep the spelling of their first
    line; repeated values are joined with ", ".
    """
    out: Dict[str, str] = {}
    spelling: Dict[str, str] = {}
    for name, value in lines:
        lowered = name.lower()
        if lowered in spelling:
            key = spelling[lowered]
            out[key] = f"{out[key]}, {value}"
        else:
            spelling[lowered] = name
            out[name] = value
    return out


def _elapsed_ms(start: float, end: float) -> int:
    return int(round((end - start) * 1000))


class Dispatcher:
    """
    Send a CompiledRequest and normalize the outcome into a ResponseRecord.

    Never raises: transport failures come back as a record with `error` set,
    status 0 and no body. The compiled request is not modified.
    """

    def __init__(
        self,
        http_client: HttpClientPort,
        logger: Optional[LoggerPort] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._http = http_client
        self._logger = logger or NullLogger()
        self._clock = clock

    def send(self, compiled: CompiledRequest) -> ResponseRecord:
        self._logger.info(
            "http.request",
            method=compiled.method,
            url=compiled.url,
            headers=mask_dict(compiled.headers),
        )

        start = self._clock()
        try:
            resp = self._http.send(
                method=compiled.method,
                url=compiled.url,
                headers=dict(compiled.headers),
                body=compiled.body,
            )
        except Exception as e:
            elapsed = _elapsed_ms(start, self._clock())
            message = e.message if isinstance(e, HttpTransportError) else (str(e) or type(e).__name__)
            self._logger.error(
                "http.request_failed",
                method=compiled.method,
                url=compiled.url,
                error=message,
                time_ms=elapsed,
            )
            return ResponseRecord(status=0, status_text="", headers={}, body=None, size=0, time=elapsed, error=message)

        elapsed = _elapsed_ms(start, self._clock())
        text = resp.text or ""
        headers = flatten_headers(resp.headers)
        content_type = get_header(headers, "Content-Type") or None

        record = ResponseRecord(
            status=resp.status,
            status_text=resp.reason,
            headers=headers,
            body=text,
            size=len(text.encode("utf-8")),
            time=elapsed,
            content_type=content_type,
        )

        self._logger.info(
            "http.response",
            method=compiled.method,
            url=compiled.url,
            final_url=resp.url,
            status=record.status,
            size=record.size,
            time_ms=record.time,
            text_head=text[:200],
        )
        return record
