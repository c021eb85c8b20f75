# tests/application/services/test_execution_deps.py
import pytest

from application.services.execution_deps import ExecutionDeps
from infrastructure.history.in_memory_history_store import InMemoryHistoryStore
from tests.fake_http_client import FakeHttpClient, RecordingLogger


class TestExecutionDeps:
    def test_create_execution_deps(self):
        client = FakeHttpClient()
        history = InMemoryHistoryStore()
        logger = RecordingLogger()

        deps = ExecutionDeps(http_client=client, history=history, logger=logger)

        assert deps.http_client is client
        assert deps.history is history
        assert deps.logger is logger

    def test_with_logger_creates_new_deps(self):
        client = FakeHttpClient()
        history = InMemoryHistoryStore()
        deps1 = ExecutionDeps(http_client=client, history=history, logger=RecordingLogger())

        logger2 = RecordingLogger()
        deps2 = deps1.with_logger(logger2)

        assert deps2 is not deps1
        assert deps2.logger is logger2
        assert deps2.http_client is client
        assert deps2.history is history

    def test_with_logger_can_bind_context(self):
        logger1 = RecordingLogger()
        deps1 = ExecutionDeps(http_client=FakeHttpClient(), history=InMemoryHistoryStore(), logger=logger1)

        deps2 = deps1.with_logger(logger1.bind(request_id=3))

        assert deps2.logger.bound == {"request_id": 3}
        assert deps1.logger is logger1

    def test_execution_deps_frozen(self):
        deps = ExecutionDeps(http_client=FakeHttpClient(), history=InMemoryHistoryStore(), logger=RecordingLogger())

        with pytest.raises(Exception):  # FrozenInstanceError
            deps.logger = RecordingLogger()
