# application/ports/requests_client.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import requests

from application.ports.http_client import HttpClientPort, HttpResponse, HttpTransportError
from application.services.body_encoder import PayloadKind, RequestPayload


class RequestsSessionHttpClient(HttpClientPort):
    def __init__(
        self,
        base_headers: Optional[Dict[str, str]] = None,
        timeout_sec: float = 30,
        verify_tls: bool = True,
        session: Optional[requests.Session] = None,
    ):
        self._session = session or requests.Session()
        self._base_headers = base_headers or {}
        self._timeout = timeout_sec
        self._verify = verify_tls

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[RequestPayload] = None,
    ) -> HttpResponse:
        merged = dict(self._base_headers)
        if headers:
            merged.update(headers)

        kwargs: Dict[str, Any] = {}
        if body is not None:
            if body.kind == PayloadKind.MULTIPART:
                # (None, value) => plain form field without filename; requests sets the boundary
                kwargs["files"] = [(k, (None, v)) for k, v in body.fields]
            else:
                kwargs["data"] = (body.text or "").encode("utf-8")

        try:
            resp = self._session.request(
                method=method.upper(),
                url=url,
                headers=merged,
                timeout=self._timeout,
                verify=self._verify,
                allow_redirects=True,
                **kwargs,
            )
        except requests.exceptions.Timeout as e:
            raise HttpTransportError(f"Request timed out after {self._timeout}s") from e
        except requests.exceptions.SSLError as e:
            raise HttpTransportError(f"TLS error: {e}") from e
        except requests.exceptions.ConnectionError as e:
            raise HttpTransportError(f"Network Error: could not connect to {url}") from e
        except requests.exceptions.RequestException as e:
            raise HttpTransportError(f"Request failed: {e}") from e

        return HttpResponse(
            status=resp.status_code,
            reason=resp.reason or "",
            url=str(resp.url),
            text=resp.text,
            headers=_header_lines(resp),
        )


def _header_lines(resp: requests.Response) -> List[Tuple[str, str]]:
    # urllib3 keeps repeated headers apart; requests' own mapping has already joined them
    raw_headers = getattr(resp.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "iteritems"):
        return [(str(k), str(v)) for k, v in raw_headers.iteritems()]
    return [(k, v) for k, v in resp.headers.items()]
