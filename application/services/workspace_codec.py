# application/services/workspace_codec.py
"""
Workspace export format <-> domain objects.

Export shape:
  {version, exportedAt, activeRequestId, settings, requests, environments, history}

Loading is tolerant: missing sections and fields fall back to the defaults a
fresh request would have, so older or hand-edited files stay loadable. The
1.0 layout (bodyType / bodyText / token / tokenType / useToken on the request)
is read as well.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from domain.auth import AuthConfig, AuthLocation, AuthType
from domain.environment import Environment
from domain.key_value import KeyValueItem, blank_rows, ensure_trailing_blank
from domain.request import DEFAULT_REQUEST_NAME, ApiRequest, BodyType, RequestBody
from domain.response_record import ResponseRecord
from domain.settings import GlobalSettings

EXPORT_VERSION = "1.2"

_LEGACY_TOKEN_TYPES = {
    "Bearer": AuthType.BEARER,
    "API Key": AuthType.API_KEY,
}
_LEGACY_API_KEY_HEADER = "X-API-Key"


@dataclass(frozen=True)
class Workspace:
    requests: List[ApiRequest] = field(default_factory=list)
    settings: GlobalSettings = field(default_factory=GlobalSettings)
    environments: List[Environment] = field(default_factory=list)
    history: List[ApiRequest] = field(default_factory=list)
    active_request_id: Optional[int] = None


def _str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """Lenient integer read: numbers and numeric strings, anything else is `default`."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    try:
        return int(float(value)) if isinstance(value, str) else int(value)
    except (ValueError, OverflowError):
        return default


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _enum(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return default


# ---------------------------------------------------------------- dump


def dump_item(item: KeyValueItem) -> Dict[str, Any]:
    return {"id": item.id, "key": item.key, "value": item.value, "enabled": item.enabled}


def dump_auth(auth: AuthConfig) -> Dict[str, Any]:
    out: Dict[str, Any] = {"type": auth.type.value, "token": auth.token}
    if auth.key_name is not None:
        out["keyName"] = auth.key_name
    if auth.add_to is not None:
        out["addTo"] = auth.add_to.value
    return out


def dump_response(record: ResponseRecord) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "status": record.status,
        "statusText": record.status_text,
        "headers": dict(record.headers),
        "body": record.body,
        "size": record.size,
        "time": record.time,
    }
    if record.error is not None:
        out["error"] = record.error
    if record.content_type is not None:
        out["contentType"] = record.content_type
    return out


def dump_request(request: ApiRequest) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": request.id,
        "name": request.name,
        "method": request.method,
        "url": request.url,
        "params": [dump_item(i) for i in request.params],
        "headers": [dump_item(i) for i in request.headers],
        "body": {
            "type": request.body.type.value,
            "content": request.body.content,
            "formData": [dump_item(i) for i in request.body.form_data],
        },
        "auth": dump_auth(request.auth),
        "response": dump_response(request.response) if request.response else None,
    }
    if request.sent_at is not None:
        out["sentAt"] = request.sent_at
    return out


def dump_environment(env: Environment) -> Dict[str, Any]:
    return {"id": env.id, "name": env.name, "variables": [dump_item(i) for i in env.variables]}


def dump_settings(settings: GlobalSettings) -> Dict[str, Any]:
    return {
        "baseUrl": settings.base_url,
        "globalAuth": dump_auth(settings.global_auth),
        "activeEnvironmentId": settings.active_environment_id,
    }


def export_workspace(
    requests: Sequence[ApiRequest],
    settings: GlobalSettings,
    environments: Sequence[Environment] = (),
    history: Sequence[ApiRequest] = (),
    active_request_id: Optional[int] = None,
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    stamp = exported_at or datetime.now(timezone.utc)
    return {
        "version": EXPORT_VERSION,
        "exportedAt": stamp.isoformat(),
        "activeRequestId": active_request_id,
        "settings": dump_settings(settings),
        "requests": [dump_request(r) for r in requests],
        "environments": [dump_environment(e) for e in environments],
        "history": [dump_request(r) for r in history],
    }


# ---------------------------------------------------------------- load


def load_item(data: Any) -> KeyValueItem:
    if not isinstance(data, dict):
        return KeyValueItem()
    kwargs: Dict[str, Any] = {
        "key": _str(data.get("key")),
        "value": _str(data.get("value")),
        "enabled": bool(data.get("enabled", True)),
    }
    if data.get("id") not in (None, ""):
        kwargs["id"] = _str(data.get("id"))
    return KeyValueItem(**kwargs)


def load_items(data: Any) -> List[KeyValueItem]:
    """Rows of an editable list; the result always ends with one blank row."""
    if not isinstance(data, list) or not data:
        return blank_rows()
    return ensure_trailing_blank([load_item(i) for i in data])


def load_auth(data: Any) -> AuthConfig:
    if not isinstance(data, dict):
        return AuthConfig()
    add_to = data.get("addTo")
    return AuthConfig(
        type=_enum(AuthType, data.get("type"), AuthType.NONE),
        token=_str(data.get("token")),
        key_name=_str(data["keyName"]) if data.get("keyName") is not None else None,
        add_to=_enum(AuthLocation, add_to, None) if add_to is not None else None,
    )


def load_response(data: Any) -> Optional[ResponseRecord]:
    if not isinstance(data, dict):
        return None
    headers = data.get("headers") or {}
    return ResponseRecord(
        status=_int(data.get("status")),
        status_text=_str(data.get("statusText")),
        headers={_str(k): _str(v) for k, v in headers.items()} if isinstance(headers, dict) else {},
        body=data.get("body") if isinstance(data.get("body"), str) else None,
        size=_int(data.get("size")),
        time=_int(data.get("time")),
        error=_str(data["error"]) if data.get("error") is not None else None,
        content_type=_str(data["contentType"]) if data.get("contentType") is not None else None,
    )


def _load_body(data: Dict[str, Any]) -> RequestBody:
    body = data.get("body")
    if isinstance(body, dict):
        return RequestBody(
            type=_enum(BodyType, body.get("type"), BodyType.NONE),
            content=_str(body.get("content")),
            form_data=load_items(body.get("formData")),
        )
    # 1.0 layout
    return RequestBody(
        type=_enum(BodyType, data.get("bodyType"), BodyType.NONE),
        content=_str(data.get("bodyText")),
        form_data=load_items(data.get("formData")),
    )


def _load_request_auth(data: Dict[str, Any]) -> AuthConfig:
    if "auth" in data:
        return load_auth(data.get("auth"))
    # 1.0 layout
    if not data.get("useToken") or not _str(data.get("token")).strip():
        return AuthConfig()
    auth_type = _LEGACY_TOKEN_TYPES.get(_str(data.get("tokenType"), "Bearer"))
    if auth_type == AuthType.BEARER:
        return AuthConfig(type=AuthType.BEARER, token=_str(data.get("token")).strip())
    if auth_type == AuthType.API_KEY:
        return AuthConfig(
            type=AuthType.API_KEY,
            token=_str(data.get("token")).strip(),
            key_name=_LEGACY_API_KEY_HEADER,
            add_to=AuthLocation.HEADER,
        )
    return AuthConfig()


def load_request(data: Dict[str, Any], request_id: int, keep_response: bool = False) -> ApiRequest:
    return ApiRequest(
        id=request_id,
        name=_str(data.get("name"), DEFAULT_REQUEST_NAME),
        method=_str(data.get("method"), "GET").upper(),
        url=_str(data.get("url")),
        params=load_items(data.get("params")),
        headers=load_items(data.get("headers")),
        body=_load_body(data),
        auth=_load_request_auth(data),
        response=load_response(data.get("response")) if keep_response else None,
        sent_at=_int(data.get("sentAt"), default=None),
    )


def load_environment(data: Any) -> Optional[Environment]:
    if not isinstance(data, dict):
        return None
    kwargs: Dict[str, Any] = {
        "name": _str(data.get("name")),
        "variables": [load_item(i) for i in _list(data.get("variables")) if isinstance(i, dict)],
    }
    if data.get("id") not in (None, ""):
        kwargs["id"] = _str(data.get("id"))
    return Environment(**kwargs)


def load_settings(data: Any) -> GlobalSettings:
    if not isinstance(data, dict):
        return GlobalSettings()
    active = data.get("activeEnvironmentId")
    return GlobalSettings(
        base_url=_str(data.get("baseUrl")),
        global_auth=load_auth(data.get("globalAuth")),
        active_environment_id=_str(active) if active not in (None, "") else None,
    )


def load_environments(data: Any) -> List[Environment]:
    if not isinstance(data, list):
        return []
    envs = [load_environment(e) for e in data]
    return [e for e in envs if e is not None]


def load_history(data: Any) -> List[ApiRequest]:
    if not isinstance(data, list):
        return []
    return [
        load_request(entry, request_id=index + 1, keep_response=True)
        for index, entry in enumerate(data)
        if isinstance(entry, dict)
    ]
