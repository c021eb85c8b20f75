# domain/response_record.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, Optional


def try_format_json(text: Optional[str]) -> Optional[str]:
    """Pretty-print `text` as JSON (2-space indent), or None when it is not JSON."""
    if text is None:
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return json.dumps(parsed, indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class ResponseRecord:
    status: int
    status_text: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    size: int = 0
    time: int = 0  # ms
    error: Optional[str] = None
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def formatted_body(self) -> Optional[str]:
        formatted = try_format_json(self.body)
        return formatted if formatted is not None else self.body
