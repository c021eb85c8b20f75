"""FastAPI application - request composer session over HTTP"""
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

import sys

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from application.executor.request_executor import RequestExecutor
from application.ports.requests_client import RequestsSessionHttpClient
from application.services.curl_snippet import generate_curl
from application.services.execution_deps import ExecutionDeps
from application.services.import_merger import merge_import
from application.services.request_collection import RequestCollection
from application.services.request_compiler import CompiledRequest, RequestCompiler
from application.services.response_format import format_bytes, status_category
from application.services.workspace_codec import (
    dump_environment,
    dump_request,
    dump_response,
    dump_settings,
    export_workspace,
    load_environments,
    load_request,
    load_settings,
)
from domain.environment import Environment, find_environment
from domain.exceptions import ImportValidationError, InvalidUrlError, ValidationError
from domain.request import ApiRequest
from domain.response_record import ResponseRecord
from domain.settings import GlobalSettings
from infrastructure.config.app_config import load_app_config
from infrastructure.history.in_memory_history_store import InMemoryHistoryStore
from infrastructure.logging.console_logger import ConsoleLogger


class CompiledRequestResponse(BaseModel):
    """Dispatch-ready request"""
    method: str = Field(description="HTTP method")
    url: str = Field(description="Absolute URL including query")
    headers: Dict[str, str] = Field(default_factory=dict, description="Final header map")
    body_kind: Optional[str] = Field(default=None, description="raw / urlencoded / multipart")
    body: Optional[str] = Field(default=None, description="Raw or URL-encoded body")
    form_fields: List[List[str]] = Field(default_factory=list, description="Multipart fields")


class ResponseDisplay(BaseModel):
    """Presentation helpers for a response record"""
    formatted_body: Optional[str] = Field(default=None, description="Pretty JSON, or the raw body")
    size_text: str = Field(description="Human readable size")
    category: str = Field(description="success / redirect / error / unknown")


class SendResponse(BaseModel):
    """Outcome of one dispatch"""
    success: bool = Field(description="False when the transport failed")
    request: Dict[str, Any] = Field(description="Request with response and sentAt set")
    response: Dict[str, Any] = Field(description="Response record")
    display: ResponseDisplay
    error: Optional[str] = Field(default=None, description="Transport error message")


class ImportRequest(BaseModel):
    """Import payload as decoded from an export file"""
    payload: Any = Field(description="Decoded export JSON")
    preferred_active_id: Optional[Any] = Field(default=None, description="Id (pre-import) to activate")


class ImportResponse(BaseModel):
    imported: int = Field(description="Number of imported requests")
    active_request_id: Optional[int] = Field(default=None, description="Active request after import")
    requests: List[Dict[str, Any]] = Field(description="All open requests")


class RenameRequest(BaseModel):
    name: str = Field(min_length=1, description="New request name")


class SnippetResponse(BaseModel):
    curl: str = Field(description="cURL command line")


@dataclass
class Session:
    """Open requests, settings and environments for this process"""
    collection: RequestCollection = field(default_factory=RequestCollection)
    settings: GlobalSettings = field(default_factory=GlobalSettings)
    environments: List[Environment] = field(default_factory=list)
    lock: Lock = field(default_factory=Lock)


# FastAPIアプリケーション
app = FastAPI(
    title="Request Composer",
    description="Compose, send and replay HTTP requests",
    version="1.0.0",
)

# 設定
CONFIG = load_app_config()
SESSION = Session()
HISTORY_STORE = InMemoryHistoryStore()
HTTP_CLIENT = RequestsSessionHttpClient(
    base_headers={"User-Agent": CONFIG.user_agent},
    timeout_sec=CONFIG.timeout_sec,
    verify_tls=CONFIG.verify_tls,
)


def _build_logger() -> ConsoleLogger:
    return ConsoleLogger(level=CONFIG.log_level)


def _build_deps() -> ExecutionDeps:
    return ExecutionDeps(http_client=HTTP_CLIENT, history=HISTORY_STORE, logger=_build_logger())


def _require_request(request_id: int) -> ApiRequest:
    request = SESSION.collection.get(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail=f"Request not found: {request_id}")
    return request


def _active_environment() -> Optional[Environment]:
    return find_environment(SESSION.environments, SESSION.settings.active_environment_id)


def _compiled_response(compiled: CompiledRequest) -> CompiledRequestResponse:
    body = compiled.body
    return CompiledRequestResponse(
        method=compiled.method,
        url=compiled.url,
        headers=compiled.headers,
        body_kind=body.kind.value if body else None,
        body=body.text if body else None,
        form_fields=[list(pair) for pair in body.fields] if body else [],
    )


def _display(record: ResponseRecord) -> ResponseDisplay:
    return ResponseDisplay(
        formatted_body=record.formatted_body,
        size_text=format_bytes(record.size),
        category=status_category(record.status),
    )


def _compile(request: ApiRequest) -> CompiledRequest:
    try:
        return RequestCompiler(logger=_build_logger()).compile(request, SESSION.settings, _active_environment())
    except InvalidUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/")
def read_root():
    """ヘルスチェック"""
    return {"status": "ok", "service": "request-composer"}


@app.get("/requests")
def list_requests() -> Dict[str, Any]:
    return {
        "activeRequestId": SESSION.collection.active_id,
        "requests": [dump_request(r) for r in SESSION.collection.requests],
    }


@app.post("/requests")
def create_request(from_history: Optional[int] = Query(default=None, ge=0)) -> Dict[str, Any]:
    """Open a blank request, or a copy of the history entry at index `from_history`."""
    template = None
    if from_history is not None:
        history = HISTORY_STORE.list()
        if from_history >= len(history):
            raise HTTPException(status_code=404, detail=f"History entry not found: {from_history}")
        template = history[from_history]
    with SESSION.lock:
        request = SESSION.collection.new_request(template)
    return dump_request(request)


@app.put("/requests/{request_id}")
def update_request(request_id: int, data: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Replace a request with the edited version sent by the editor."""
    current = _require_request(request_id)
    edited = load_request(data, request_id=request_id)
    with SESSION.lock:
        stored = SESSION.collection.replace(edited.with_response(current.response, current.sent_at))
    return dump_request(stored)


@app.post("/requests/{request_id}/rename")
def rename_request(request_id: int, body: RenameRequest = Body(...)) -> Dict[str, Any]:
    _require_request(request_id)
    with SESSION.lock:
        renamed = SESSION.collection.rename(request_id, body.name)
    return dump_request(renamed)


@app.delete("/requests/{request_id}")
def close_request(request_id: int) -> Dict[str, Any]:
    _require_request(request_id)
    with SESSION.lock:
        SESSION.collection.close(request_id)
    return {"activeRequestId": SESSION.collection.active_id}


@app.post("/requests/{request_id}/compile", response_model=CompiledRequestResponse)
def compile_request(request_id: int) -> CompiledRequestResponse:
    return _compiled_response(_compile(_require_request(request_id)))


@app.get("/requests/{request_id}/snippet", response_model=SnippetResponse)
def request_snippet(request_id: int) -> SnippetResponse:
    return SnippetResponse(curl=generate_curl(_compile(_require_request(request_id))))


@app.post("/requests/{request_id}/send", response_model=SendResponse)
def send_request(request_id: int) -> SendResponse:
    _require_request(request_id)
    executor = RequestExecutor()
    try:
        result = executor.execute_in(
            SESSION.collection,
            request_id,
            SESSION.settings,
            SESSION.environments,
            _build_deps(),
        )
    except InvalidUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return SendResponse(
        success=result.ok,
        request=dump_request(result.request),
        response=dump_response(result.record),
        display=_display(result.record),
        error=result.record.error,
    )


@app.get("/settings")
def get_settings() -> Dict[str, Any]:
    return dump_settings(SESSION.settings)


@app.put("/settings")
def replace_settings(data: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    with SESSION.lock:
        SESSION.settings = load_settings(data)
    return dump_settings(SESSION.settings)


@app.get("/environments")
def list_environments() -> List[Dict[str, Any]]:
    return [dump_environment(e) for e in SESSION.environments]


@app.put("/environments")
def replace_environments(data: List[Dict[str, Any]] = Body(...)) -> List[Dict[str, Any]]:
    with SESSION.lock:
        SESSION.environments = load_environments(data)
    return [dump_environment(e) for e in SESSION.environments]


@app.post("/workspace/import", response_model=ImportResponse)
def import_workspace(request: ImportRequest = Body(...)) -> ImportResponse:
    logger = _build_logger()
    with SESSION.lock:
        try:
            result = merge_import(
                SESSION.collection.requests,
                request.payload,
                preferred_active_id=request.preferred_active_id,
                current_active_id=SESSION.collection.active_id,
            )
        except ImportValidationError as e:
            logger.error("import.rejected", errors=e.errors)
            raise HTTPException(status_code=422, detail=e.errors)

        SESSION.collection.extend(result.imported, result.active_id)
        if isinstance(request.payload, dict) and "environments" in request.payload:
            SESSION.environments = SESSION.environments + load_environments(request.payload["environments"])

    logger.info("import.merged", imported=len(result.imported), active_request_id=result.active_id)
    return ImportResponse(
        imported=len(result.imported),
        active_request_id=result.active_id,
        requests=[dump_request(r) for r in SESSION.collection.requests],
    )


@app.get("/workspace/export")
def export_current_workspace() -> Dict[str, Any]:
    return export_workspace(
        requests=SESSION.collection.requests,
        settings=SESSION.settings,
        environments=SESSION.environments,
        history=HISTORY_STORE.list(),
        active_request_id=SESSION.collection.active_id,
    )


@app.get("/history")
def list_history() -> List[Dict[str, Any]]:
    return [dump_request(r) for r in HISTORY_STORE.list()]


@app.delete("/history")
def clear_history() -> Dict[str, Any]:
    HISTORY_STORE.clear()
    return {"cleared": True}
