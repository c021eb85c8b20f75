# tests/application/services/test_workspace_codec.py
from datetime import datetime, timezone

from application.services.workspace_codec import (
    EXPORT_VERSION,
    dump_auth,
    dump_request,
    export_workspace,
    load_auth,
    load_environments,
    load_history,
    load_items,
    load_request,
    load_response,
    load_settings,
)
from domain.auth import AuthConfig, AuthLocation, AuthType
from domain.environment import Environment
from domain.key_value import KeyValueItem
from domain.request import ApiRequest, BodyType
from domain.response_record import ResponseRecord
from domain.settings import GlobalSettings


class TestExport:
    def test_top_level_shape(self):
        stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        data = export_workspace([ApiRequest(id=1)], GlobalSettings(), active_request_id=1, exported_at=stamp)

        assert data["version"] == EXPORT_VERSION == "1.2"
        assert data["exportedAt"] == "2024-01-02T03:04:05+00:00"
        assert data["activeRequestId"] == 1
        assert data["settings"] == {
            "baseUrl": "",
            "globalAuth": {"type": "none", "token": ""},
            "activeEnvironmentId": None,
        }
        assert len(data["requests"]) == 1
        assert data["environments"] == []
        assert data["history"] == []

    def test_request_shape(self):
        request = ApiRequest(id=2, name="n", method="PUT", url="/u").with_response(
            ResponseRecord(status=200, status_text="OK", body="b", content_type="text/plain"), sent_at=9
        )

        data = dump_request(request)

        assert data["id"] == 2
        assert data["body"]["type"] == "none"
        assert data["body"]["formData"][0]["key"] == ""
        assert data["auth"] == {"type": "none", "token": ""}
        assert data["response"]["statusText"] == "OK"
        assert data["response"]["contentType"] == "text/plain"
        assert "error" not in data["response"]
        assert data["sentAt"] == 9

    def test_api_key_auth_uses_camel_case(self):
        auth = AuthConfig(type=AuthType.API_KEY, token="K", key_name="k", add_to=AuthLocation.HEADER)

        assert dump_auth(auth) == {"type": "api-key", "token": "K", "keyName": "k", "addTo": "header"}


class TestLoad:
    def test_missing_lists_become_one_blank_row(self):
        assert len(load_items(None)) == 1
        assert len(load_items([])) == 1
        assert load_items(None)[0].is_blank()

    def test_items_keep_ids(self):
        items = load_items([{"id": "abc", "key": "k", "value": "v", "enabled": False}])

        assert items[0] == KeyValueItem(key="k", value="v", enabled=False, id="abc")

    def test_items_end_with_one_blank_row(self):
        items = load_items([
            {"key": "a", "value": "1"},
            {"key": "", "value": ""},
            {"key": "", "value": ""},
        ])
        assert [i.key for i in items] == ["a", ""]

        items = load_items([{"key": "a", "value": "1"}])
        assert len(items) == 2
        assert items[-1].is_blank()

    def test_unknown_enum_values_fall_back(self):
        request = load_request({"body": {"type": "xml"}, "auth": {"type": "digest"}}, request_id=1)

        assert request.body.type == BodyType.NONE
        assert request.auth.type == AuthType.NONE

    def test_request_defaults(self):
        request = load_request({}, request_id=4)

        assert request.id == 4
        assert request.name == "New Request"
        assert request.method == "GET"
        assert request.url == ""

    def test_auth_round_trip(self):
        auth = AuthConfig(type=AuthType.API_KEY, token="K", key_name="api_key", add_to=AuthLocation.QUERY)

        assert load_auth(dump_auth(auth)) == auth

    def test_response_tolerates_bad_headers(self):
        record = load_response({"status": 500, "headers": ["x"], "body": 3})

        assert record.status == 500
        assert record.headers == {}
        assert record.body is None

    def test_response_numbers_are_read_leniently(self):
        record = load_response({"status": "404", "size": True, "time": float("inf")})

        assert record.status == 404
        assert record.size == 0
        assert record.time == 0

    def test_non_list_variables_are_ignored(self):
        envs = load_environments([{"id": "e1", "name": "dev", "variables": 5}])

        assert envs[0].variables == []

    def test_settings(self):
        settings = load_settings({"baseUrl": "https://x.test", "globalAuth": {"type": "bearer", "token": "T"}})

        assert settings.base_url == "https://x.test"
        assert settings.global_auth == AuthConfig(type=AuthType.BEARER, token="T")
        assert settings.active_environment_id is None

    def test_environments_skip_bad_entries(self):
        envs = load_environments([{"id": "e1", "name": "dev", "variables": [{"key": "a", "value": "1"}]}, "junk"])

        assert envs == [Environment(name="dev", id="e1", variables=[envs[0].variables[0]])]
        assert envs[0].variables[0].key == "a"

    def test_history_keeps_responses(self):
        history = load_history([
            {"name": "a", "url": "/a", "response": {"status": 200, "statusText": "OK"}, "sentAt": 3},
            {"name": "b", "url": "/b"},
        ])

        assert [h.id for h in history] == [1, 2]
        assert history[0].response.status == 200
        assert history[0].sent_at == 3
        assert history[1].response is None
