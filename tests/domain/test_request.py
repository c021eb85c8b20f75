# tests/domain/test_request.py
from domain.auth import AuthConfig, AuthType
from domain.key_value import KeyValueItem
from domain.request import ApiRequest, BodyType, RequestBody
from domain.response_record import ResponseRecord


def test_new_request_defaults() -> None:
    request = ApiRequest(id=1)

    assert request.name == "New Request"
    assert request.method == "GET"
    assert request.url == ""
    assert len(request.params) == 1 and request.params[0].is_blank()
    assert len(request.headers) == 1 and request.headers[0].is_blank()
    assert request.body.type == BodyType.NONE
    assert request.auth.type == AuthType.NONE
    assert request.response is None
    assert request.sent_at is None


def test_typed_updates_return_new_values() -> None:
    # Arrange
    original = ApiRequest(id=7, url="/a")

    # Act
    edited = (
        original.with_url("/b")
        .with_method("post")
        .with_params([KeyValueItem(key="q", value="1")])
        .with_headers([KeyValueItem(key="X-Trace", value="t")])
        .with_body(RequestBody(type=BodyType.JSON, content="{}"))
        .with_auth(AuthConfig(type=AuthType.BEARER, token="T"))
    )

    # Assert
    assert original.url == "/a"
    assert original.method == "GET"
    assert edited.id == 7
    assert edited.url == "/b"
    assert edited.method == "POST"
    assert edited.params[0].key == "q"
    assert edited.headers[0].key == "X-Trace"
    assert edited.body.type == BodyType.JSON
    assert edited.auth.token == "T"


def test_with_response_sets_response_and_timestamp() -> None:
    record = ResponseRecord(status=200, status_text="OK", body="{}")
    request = ApiRequest(id=1).with_response(record, sent_at=1700000000000)

    assert request.response is record
    assert request.sent_at == 1700000000000

