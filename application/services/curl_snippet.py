# application/services/curl_snippet.py
from __future__ import annotations

import shlex
from typing import List

from application.services.body_encoder import PayloadKind
from application.services.request_compiler import CompiledRequest


def generate_curl(compiled: CompiledRequest) -> str:
    """cURL command line equivalent to `compiled`, one option per line."""
    parts: List[str] = [f"curl -X {compiled.method} {shlex.quote(compiled.url)}"]

    for name, value in compiled.headers.items():
        parts.append(f"-H {shlex.quote(f'{name}: {value}')}")

    body = compiled.body
    if body is not None:
        if body.kind == PayloadKind.MULTIPART:
            for name, value in body.fields:
                parts.append(f"-F {shlex.quote(f'{name}={value}')}")
        elif body.text:
            parts.append(f"--data-raw {shlex.quote(body.text)}")

    return " \\\n  ".join(parts)
