# application/services/execution_deps.py
from __future__ import annotations

from dataclasses import dataclass, replace

from application.ports.history_store import HistoryStorePort
from application.ports.http_client import HttpClientPort
from application.ports.logger import LoggerPort


@dataclass(frozen=True)
class ExecutionDeps:
    http_client: HttpClientPort
    history: HistoryStorePort
    logger: LoggerPort

    def with_logger(self, logger: LoggerPort) -> "ExecutionDeps":
        return replace(self, logger=logger)
