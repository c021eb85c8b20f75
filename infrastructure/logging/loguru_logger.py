# infrastructure/logging/loguru_logger.py
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from loguru import logger as _loguru

from application.ports.logger import LoggerPort


class LoguruLogger(LoggerPort):
    """LoggerPort on top of loguru; bound fields travel in loguru's `extra`."""

    def __init__(self, bound: Optional[Dict[str, Any]] = None, sink_logger=None):
        self._bound: Dict[str, Any] = dict(bound or {})
        self._logger = sink_logger or _loguru

    def bind(self, **fields: Any) -> "LoguruLogger":
        merged = dict(self._bound)
        merged.update(fields)
        return LoguruLogger(bound=merged, sink_logger=self._logger)

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("DEBUG", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("INFO", event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._emit("WARNING", event, fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("ERROR", event, fields)

    def _emit(self, level: str, event: str, fields: Dict[str, Any]) -> None:
        payload = dict(self._bound)
        payload.update(fields)
        message = f"{event} {json.dumps(payload, ensure_ascii=False, default=str)}"
        # opt(depth=2): report the caller of debug()/info(), not this adapter
        self._logger.bind(**{**payload, "event": event}).opt(depth=2).log(level, message)
