# application/executor/request_executor.py
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from application.services.dispatcher import Dispatcher
from application.services.execution_deps import ExecutionDeps
from application.services.request_collection import RequestCollection
from application.services.request_compiler import CompiledRequest, RequestCompiler
from domain.environment import Environment, find_environment
from domain.exceptions import ValidationError
from domain.request import ApiRequest
from domain.response_record import ResponseRecord
from domain.settings import GlobalSettings


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ExecutionResult:
    request: ApiRequest
    compiled: CompiledRequest
    record: ResponseRecord

    @property
    def ok(self) -> bool:
        return self.record.error is None


class RequestExecutor:
    """
    compile -> dispatch -> stamp the request -> append to history.

    InvalidUrlError from the compiler propagates before anything is sent or
    recorded. Dispatch failures do not raise; they come back in the record and
    are still written to history.
    """

    def __init__(self, compiler_factory: Optional[Callable[..., RequestCompiler]] = None, clock_ms: Callable[[], int] = _now_ms):
        self._compiler_factory = compiler_factory or RequestCompiler
        self._clock_ms = clock_ms

    def execute(
        self,
        request: ApiRequest,
        settings: GlobalSettings,
        environments: Sequence[Environment],
        deps: ExecutionDeps,
    ) -> ExecutionResult:
        deps = deps.with_logger(deps.logger.bind(request_id=request.id))
        environment = find_environment(environments, settings.active_environment_id)

        compiled = self._compiler_factory(logger=deps.logger).compile(request, settings, environment)
        record = Dispatcher(deps.http_client, deps.logger).send(compiled)

        updated = request.with_response(record, sent_at=self._clock_ms())
        history = deps.history.append(updated)
        deps.logger.info("history.appended", size=len(history), status=record.status, error=record.error)

        return ExecutionResult(request=updated, compiled=compiled, record=record)

    def execute_in(
        self,
        collection: RequestCollection,
        request_id: int,
        settings: GlobalSettings,
        environments: Sequence[Environment],
        deps: ExecutionDeps,
    ) -> ExecutionResult:
        """Send a request of `collection` and store the stamped copy back into it."""
        request = collection.require(request_id)
        if not collection.try_mark_pending(request_id):
            raise ValidationError(f"Request {request_id} is already being sent")

        try:
            result = self.execute(request, settings, environments, deps)
        finally:
            collection.clear_pending(request_id)

        # the request may have been closed while in flight
        collection.replace_if_open(result.request)
        return result
