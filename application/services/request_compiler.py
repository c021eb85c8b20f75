# application/services/request_compiler.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from application.ports.logger import LoggerPort
from application.services.auth_resolver import resolve_auth
from application.services.body_encoder import BodyEncoder, RequestPayload
from application.services.key_value_normalizer import drop_header, normalize, to_map
from application.services.redactor import mask_dict
from application.services.url_builder import build_url, join_base_url
from application.services.variable_resolver import VariableResolver
from domain.auth import AuthLocation
from domain.environment import Environment
from domain.request import ApiRequest
from domain.settings import GlobalSettings

CONTENT_TYPE = "Content-Type"


@dataclass(frozen=True)
class CompiledRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[RequestPayload] = None


class RequestCompiler:
    """
    Turn an editable ApiRequest into a dispatch-ready CompiledRequest.

    Pure apart from debug logging: settings and the active environment come in
    as arguments. Raises InvalidUrlError before anything is sent.
    """

    def __init__(self, encoder: Optional[BodyEncoder] = None, logger: Optional[LoggerPort] = None):
        self._encoder = encoder or BodyEncoder()
        self._logger = logger

    def compile(
        self,
        request: ApiRequest,
        settings: GlobalSettings,
        environment: Optional[Environment] = None,
    ) -> CompiledRequest:
        resolver = VariableResolver.for_environment(environment)
        method = (request.method or "GET").upper()

        url = resolver.render(request.url)
        base_url = resolver.render(settings.base_url)
        joined = join_base_url(base_url, url)

        query: List[Tuple[str, str]] = normalize(request.params, resolver)
        headers = to_map(request.headers, resolver)

        placement = resolve_auth(request.auth, settings.global_auth, resolver)
        if placement is not None:
            if placement.location == AuthLocation.HEADER:
                headers = drop_header(headers, placement.name)
                headers[placement.name] = placement.value
            else:
                query.append((placement.name, placement.value))

        final_url = build_url(joined, query)

        encoded = self._encoder.encode(method, request.body, resolver)
        if encoded.drop_content_type:
            headers = drop_header(headers, CONTENT_TYPE)
        elif encoded.content_type:
            headers = drop_header(headers, CONTENT_TYPE)
            headers[CONTENT_TYPE] = encoded.content_type

        compiled = CompiledRequest(method=method, url=final_url, headers=headers, body=encoded.payload)

        if self._logger is not None:
            secret_names = frozenset({placement.name.lower()}) if placement else frozenset()
            unresolved = resolver.unresolved(request.url) + resolver.unresolved(settings.base_url)
            if unresolved:
                self._logger.warning(
                    "request.unresolved_variables",
                    request_id=request.id,
                    names=unresolved,
                )
            self._logger.debug(
                "request.compiled",
                request_id=request.id,
                method=compiled.method,
                url=compiled.url,
                headers=mask_dict(compiled.headers, secret_names),
                body_kind=compiled.body.kind.value if compiled.body else None,
                auth=placement.location.value if placement else None,
            )

        return compiled
