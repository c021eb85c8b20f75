# tests/application/services/test_request_collection.py
from threading import Barrier, Thread

import pytest

from application.services.request_collection import RequestCollection
from domain.exceptions import ValidationError
from domain.request import ApiRequest
from domain.response_record import ResponseRecord


class TestRequestCollection:
    def test_new_request_is_active(self):
        collection = RequestCollection()

        first = collection.new_request()
        second = collection.new_request()

        assert (first.id, second.id) == (1, 2)
        assert collection.active_id == 2
        assert first.name == "New Request"

    def test_ids_continue_after_existing(self):
        collection = RequestCollection([ApiRequest(id=7)], active_id=7)

        assert collection.new_request().id == 8

    def test_unknown_active_id_is_ignored(self):
        assert RequestCollection([ApiRequest(id=1)], active_id=3).active_id is None

    def test_new_request_from_history_drops_response(self):
        collection = RequestCollection([ApiRequest(id=1)])
        snapshot = ApiRequest(id=1, name="old", url="/x").with_response(
            ResponseRecord(status=200, status_text="OK"), sent_at=1
        )

        copy = collection.new_request(snapshot)

        assert copy.id == 2
        assert copy.name == "old"
        assert copy.url == "/x"
        assert copy.response is None
        assert copy.sent_at is None

    def test_replace_and_rename(self):
        collection = RequestCollection([ApiRequest(id=1)])

        collection.replace(ApiRequest(id=1, url="/new"))
        renamed = collection.rename(1, "Renamed")

        assert renamed.url == "/new"
        assert collection.get(1).name == "Renamed"

    def test_replace_unknown_raises(self):
        with pytest.raises(ValidationError):
            RequestCollection().replace(ApiRequest(id=1))

    def test_close_active_moves_to_last(self):
        collection = RequestCollection([ApiRequest(id=1), ApiRequest(id=2), ApiRequest(id=3)], active_id=2)

        collection.close(2)

        assert [r.id for r in collection.requests] == [1, 3]
        assert collection.active_id == 3

    def test_close_last_request(self):
        collection = RequestCollection([ApiRequest(id=1)], active_id=1)

        collection.close(1)

        assert collection.requests == []
        assert collection.active_id is None

    def test_extend_moves_sequence_forward(self):
        collection = RequestCollection([ApiRequest(id=1)], active_id=1)

        collection.extend([ApiRequest(id=5)], active_id=5)

        assert collection.active_id == 5
        assert collection.new_request().id == 6

    def test_pending_tracking(self):
        collection = RequestCollection([ApiRequest(id=1)])

        assert collection.try_mark_pending(1) is True
        assert collection.try_mark_pending(1) is False
        collection.clear_pending(1)
        assert collection.try_mark_pending(1) is True

    def test_replace_if_open(self):
        collection = RequestCollection([ApiRequest(id=1)])

        assert collection.replace_if_open(ApiRequest(id=1, url="/x")) is True
        assert collection.replace_if_open(ApiRequest(id=2)) is False
        assert collection.get(1).url == "/x"


def test_only_one_concurrent_claim_wins() -> None:
    # Arrange
    collection = RequestCollection([ApiRequest(id=1)])
    barrier = Barrier(8)
    results = []

    def claim() -> None:
        barrier.wait()
        results.append(collection.try_mark_pending(1))

    threads = [Thread(target=claim) for _ in range(8)]

    # Act
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # Assert
    assert sorted(results) == [False] * 7 + [True]
