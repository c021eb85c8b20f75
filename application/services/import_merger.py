# application/services/import_merger.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from application.services.workspace_codec import (
    Workspace,
    load_environments,
    load_history,
    load_request,
    load_settings,
)
from domain.exceptions import ImportValidationError
from domain.request import ApiRequest


def _id_key(value: Any) -> Optional[Union[int, str]]:
    """Old ids usable as map keys; anything else (lists, objects, bools) is ignored."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return None
    return value


@dataclass(frozen=True)
class ImportResult:
    requests: List[ApiRequest]
    active_id: Optional[int]
    imported: List[ApiRequest]
    id_map: Dict[Union[int, str], int]


def validate_import_payload(payload: Any) -> List[str]:
    """Every structural problem in `payload`, as display-ready messages."""
    if not isinstance(payload, dict):
        return ["Invalid file format"]

    requests = payload.get("requests")
    if not isinstance(requests, list):
        return ["Missing or invalid requests array"]

    errors: List[str] = []
    for index, req in enumerate(requests, start=1):
        if not isinstance(req, dict):
            errors.append(f"Request {index}: Invalid request entry")
            continue
        if not req.get("method"):
            errors.append(f"Request {index}: Missing method")
        if req.get("url") is None:
            errors.append(f"Request {index}: Missing URL")
        if not req.get("name"):
            errors.append(f"Request {index}: Missing name")
    return errors


def merge_import(
    existing: Sequence[ApiRequest],
    payload: Any,
    preferred_active_id: Any = None,
    current_active_id: Optional[int] = None,
) -> ImportResult:
    """
    Append the requests of an import payload to `existing` under fresh ids.

    - ids continue from max(existing ids): max + 1, max + 2, ...
    - responses are dropped, `sentAt` is kept; missing fields get their defaults
    - active id: the preferred (pre-import) id if it was imported, else the
      first imported request, else `current_active_id`

    Raises ImportValidationError, without merging anything, when the payload
    is malformed. `preferred_active_id` defaults to the payload's
    `activeRequestId`.
    """
    errors = validate_import_payload(payload)
    if errors:
        raise ImportValidationError(errors)

    if preferred_active_id is None:
        preferred_active_id = payload.get("activeRequestId")
    preferred = _id_key(preferred_active_id)

    max_id = max((r.id for r in existing), default=0)
    id_map: Dict[Union[int, str], int] = {}
    imported: List[ApiRequest] = []
    for index, data in enumerate(payload["requests"]):
        new_id = max_id + index + 1
        old_id = _id_key(data.get("id"))
        if old_id is not None:
            # a repeated old id maps to its last occurrence
            id_map[old_id] = new_id
        imported.append(load_request(data, request_id=new_id))

    if preferred is not None and preferred in id_map:
        active_id: Optional[int] = id_map[preferred]
    elif imported:
        active_id = imported[0].id
    else:
        active_id = current_active_id

    return ImportResult(
        requests=list(existing) + imported,
        active_id=active_id,
        imported=imported,
        id_map=id_map,
    )


def load_workspace(data: Any) -> Workspace:
    """
    Read a whole exported workspace as a fresh session.

    Requests go through the same validation and re-keying as an import into an
    empty collection; missing `settings` means defaults and missing
    `environments` an empty list.
    """
    result = merge_import([], data)
    return Workspace(
        requests=result.requests,
        settings=load_settings(data.get("settings")),
        environments=load_environments(data.get("environments")),
        history=load_history(data.get("history")),
        active_request_id=result.active_id,
    )
