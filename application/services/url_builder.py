# application/services/url_builder.py
from __future__ import annotations

import re
from typing import List, Tuple

from requests.exceptions import RequestException
from requests.models import PreparedRequest

from domain.exceptions import InvalidUrlError

_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_SCHEME_SLASHES = re.compile(r"^(https?:)/+", re.IGNORECASE)


def has_http_scheme(url: str) -> bool:
    return bool(_HTTP_SCHEME.match(url))


def join_base_url(base_url: str, url: str) -> str:
    """Prefix a relative `url` with `base_url`. Absolute http(s) URLs pass through."""
    base = (base_url or "").strip()
    url = (url or "").strip()
    if not base or has_http_scheme(url):
        return url
    return base.rstrip("/") + "/" + url.lstrip("/")


def build_url(raw_url: str, query: List[Tuple[str, str]]) -> str:
    """
    Parse `raw_url` and append `query` in order.

    Without a scheme, `http://` is prefixed and leading slashes are folded into
    it, so `/echo` reads as host `echo`. Extra slashes after an explicit scheme
    collapse the same way (`http:///echo` is `http://echo/`).

    Repeated keys are all appended. Raises InvalidUrlError when the URL has no
    usable host or cannot be parsed.
    """
    if has_http_scheme(raw_url):
        candidate = _SCHEME_SLASHES.sub(r"\1//", raw_url, count=1)
    else:
        candidate = "http://" + raw_url.lstrip("/")
    prepared = PreparedRequest()
    try:
        prepared.prepare_url(candidate, query or None)
    except (RequestException, ValueError) as e:
        raise InvalidUrlError(raw_url, reason=str(e)) from e
    return prepared.url
