from __future__ import annotations

import pytest
from fastapi import HTTPException

from api import main
from api.main import ImportRequest, RenameRequest
from application.ports.http_client import HttpTransportError
from infrastructure.history.in_memory_history_store import InMemoryHistoryStore
from tests.fake_http_client import FakeHttpClient, ok_response


@pytest.fixture
def client(monkeypatch) -> FakeHttpClient:
    fake = FakeHttpClient()
    monkeypatch.setattr(main, "SESSION", main.Session())
    monkeypatch.setattr(main, "HISTORY_STORE", InMemoryHistoryStore())
    monkeypatch.setattr(main, "HTTP_CLIENT", fake)
    return fake


def _request_payload(**overrides):
    data = {"name": "Create", "method": "POST", "url": "/items", "body": {"type": "json", "content": '{"a":1}'}}
    data.update(overrides)
    return data


def test_create_update_and_send(client) -> None:
    # Arrange
    created = main.create_request(from_history=None)
    main.replace_settings({"baseUrl": "https://api.example.com", "globalAuth": {"type": "bearer", "token": "T"}})
    main.update_request(created["id"], _request_payload())
    client.queue(ok_response(text='{"id":1}', status=201, reason="Created", headers=[("Content-Type", "application/json")]))

    # Act
    response = main.send_request(created["id"])

    # Assert
    call = client.calls[0]
    assert call.method == "POST"
    assert call.url == "https://api.example.com/items"
    assert call.headers == {"Content-Type": "application/json", "Authorization": "Bearer T"}
    assert response.success is True
    assert response.response["status"] == 201
    assert response.display.formatted_body == '{\n  "id": 1\n}'
    assert response.display.category == "success"
    assert response.request["sentAt"] is not None
    assert len(main.list_history()) == 1


def test_send_failure_is_reported_not_raised(client) -> None:
    created = main.create_request(from_history=None)
    main.update_request(created["id"], _request_payload(url="https://down.test/"))
    client.queue(HttpTransportError("Network Error: could not connect to https://down.test/"))

    response = main.send_request(created["id"])

    assert response.success is False
    assert response.error == "Network Error: could not connect to https://down.test/"
    assert response.response["status"] == 0
    assert len(main.list_history()) == 1


def test_send_invalid_url_is_400(client) -> None:
    created = main.create_request(from_history=None)

    with pytest.raises(HTTPException) as excinfo:
        main.send_request(created["id"])

    assert excinfo.value.status_code == 400
    assert client.calls == []


def test_send_while_pending_is_409(client) -> None:
    created = main.create_request(from_history=None)
    main.SESSION.collection.try_mark_pending(created["id"])

    with pytest.raises(HTTPException) as excinfo:
        main.send_request(created["id"])

    assert excinfo.value.status_code == 409


def test_unknown_request_is_404(client) -> None:
    with pytest.raises(HTTPException) as excinfo:
        main.compile_request(99)

    assert excinfo.value.status_code == 404


def test_compile_and_snippet(client) -> None:
    created = main.create_request(from_history=None)
    main.update_request(created["id"], _request_payload(url="https://x.test/items"))

    compiled = main.compile_request(created["id"])
    snippet = main.request_snippet(created["id"])

    assert compiled.url == "https://x.test/items"
    assert compiled.body_kind == "raw"
    assert compiled.body == '{"a":1}'
    assert snippet.curl.startswith("curl -X POST https://x.test/items")
    assert client.calls == []


def test_update_keeps_last_response(client) -> None:
    created = main.create_request(from_history=None)
    main.update_request(created["id"], _request_payload(url="https://x.test/"))
    main.send_request(created["id"])

    updated = main.update_request(created["id"], _request_payload(url="https://x.test/other"))

    assert updated["url"] == "https://x.test/other"
    assert updated["response"]["status"] == 200


def test_reopen_from_history(client) -> None:
    created = main.create_request(from_history=None)
    main.update_request(created["id"], _request_payload(url="https://x.test/"))
    main.send_request(created["id"])

    reopened = main.create_request(from_history=0)

    assert reopened["id"] == created["id"] + 1
    assert reopened["url"] == "https://x.test/"
    assert reopened["response"] is None
    assert main.list_requests()["activeRequestId"] == reopened["id"]


def test_reopen_missing_history_is_404(client) -> None:
    with pytest.raises(HTTPException) as excinfo:
        main.create_request(from_history=0)

    assert excinfo.value.status_code == 404


def test_close_request_moves_active(client) -> None:
    first = main.create_request(from_history=None)
    second = main.create_request(from_history=None)

    result = main.close_request(second["id"])

    assert result == {"activeRequestId": first["id"]}


def test_import_merges_requests_and_environments(client) -> None:
    main.create_request(from_history=None)
    payload = {
        "version": "1.2",
        "activeRequestId": 8,
        "requests": [
            {"id": 7, "name": "a", "method": "GET", "url": "/a"},
            {"id": 8, "name": "b", "method": "GET", "url": "/b"},
        ],
        "environments": [{"id": "dev", "name": "dev", "variables": []}],
    }

    response = main.import_workspace(ImportRequest(payload=payload))

    assert response.imported == 2
    assert response.active_request_id == 3
    assert [r["id"] for r in response.requests] == [1, 2, 3]
    assert [e["id"] for e in main.list_environments()] == ["dev"]


def test_import_rejects_invalid_payload(client) -> None:
    main.create_request(from_history=None)

    with pytest.raises(HTTPException) as excinfo:
        main.import_workspace(ImportRequest(payload={"requests": [{"name": "a"}]}))

    assert excinfo.value.status_code == 422
    assert excinfo.value.detail == ["Request 1: Missing method", "Request 1: Missing URL"]
    assert len(main.list_requests()["requests"]) == 1


def test_export_round_trips_through_import(client) -> None:
    created = main.create_request(from_history=None)
    main.update_request(created["id"], _request_payload())
    main.replace_environments([{"id": "e1", "name": "dev", "variables": [{"key": "k", "value": "v"}]}])

    exported = main.export_current_workspace()

    assert exported["version"] == "1.2"
    assert exported["activeRequestId"] == created["id"]
    assert exported["requests"][0]["body"] == {
        "type": "json",
        "content": '{"a":1}',
        "formData": exported["requests"][0]["body"]["formData"],
    }
    assert exported["environments"][0]["variables"][0]["key"] == "k"


def test_clear_history(client) -> None:
    created = main.create_request(from_history=None)
    main.update_request(created["id"], _request_payload(url="https://x.test/"))
    main.send_request(created["id"])

    assert main.clear_history() == {"cleared": True}
    assert main.list_history() == []


def test_rename_request(client) -> None:
    created = main.create_request(from_history=None)

    renamed = main.rename_request(created["id"], RenameRequest(name="List users"))

    assert renamed["name"] == "List users"
    assert main.list_requests()["requests"][0]["name"] == "List users"


def test_import_with_malformed_ids_is_accepted(client) -> None:
    payload = {
        "activeRequestId": {"a": 1},
        "requests": [{"id": [1], "name": "n", "method": "GET", "url": "/x"}],
    }

    response = main.import_workspace(ImportRequest(payload=payload))

    assert response.imported == 1
    assert response.active_request_id == 1
