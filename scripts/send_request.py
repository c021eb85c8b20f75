#!/usr/bin/env python3
"""
Compose and send a request from a workspace file

Usage:
  python scripts/send_request.py send --workspace <path> [--request-id <id>] [--env-file <path>]
  python scripts/send_request.py compile --workspace <path> [--request-id <id>] [--env-file <path>]
  python scripts/send_request.py curl --workspace <path> [--request-id <id>] [--env-file <path>]

Examples:
  python scripts/send_request.py send --workspace exports/api.json
  python scripts/send_request.py send --workspace collections/users.yaml --request-id 2 --env-file .env.staging
  python scripts/send_request.py curl --workspace exports/api.json --base-url https://staging.example.com
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

from application.executor.request_executor import RequestExecutor
from application.ports.requests_client import RequestsSessionHttpClient
from application.services.curl_snippet import generate_curl
from application.services.execution_deps import ExecutionDeps
from application.services.request_compiler import RequestCompiler
from application.services.response_format import format_bytes
from application.services.workspace_codec import Workspace
from domain.environment import Environment, find_environment
from domain.exceptions import InvalidUrlError
from domain.request import ApiRequest
from domain.settings import GlobalSettings
from infrastructure.config.app_config import AppConfig
from infrastructure.environments.dotenv_environment import DotenvEnvironmentProvider
from infrastructure.history.in_memory_history_store import InMemoryHistoryStore
from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.workspace.base_loader import WorkspaceLoadError
from infrastructure.workspace.loader_registry import WorkspaceLoaderRegistry

EXIT_OK = 0
EXIT_DISPATCH_FAILED = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Request composer command line")
    subparsers = parser.add_subparsers(dest="command")

    for name, help_text in (
        ("send", "Compile and send a request"),
        ("compile", "Print the compiled request"),
        ("curl", "Print an equivalent cURL command"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--workspace", type=str, required=True)
        sub.add_argument("--request-id", type=int)
        sub.add_argument("--env-file", type=str)
        sub.add_argument("--base-url", type=str)

    return parser


def _load_workspace(path: str) -> Workspace:
    return WorkspaceLoaderRegistry().load(path)


def _pick_request(workspace: Workspace, request_id: Optional[int]) -> ApiRequest:
    wanted = request_id if request_id is not None else workspace.active_request_id
    for request in workspace.requests:
        if request.id == wanted:
            return request
    if request_id is None and workspace.requests:
        return workspace.requests[0]
    raise ValueError(f"Request not found: {wanted}")


def _environments(workspace: Workspace, settings: GlobalSettings, env_file: Optional[str]) -> tuple[GlobalSettings, List[Environment]]:
    environments = list(workspace.environments)
    if env_file:
        env = DotenvEnvironmentProvider(env_file).load()
        environments.append(env)
        settings = settings.with_active_environment(env.id)
    return settings, environments


def _print_compiled(method: str, url: str, headers: dict, body_text: Optional[str]) -> None:
    print(f"{method} {url}")
    for name, value in headers.items():
        print(f"{name}: {value}")
    if body_text:
        print()
        print(body_text)


def _run(args: argparse.Namespace, config: AppConfig) -> int:
    workspace = _load_workspace(args.workspace)
    request = _pick_request(workspace, args.request_id)

    settings = workspace.settings
    if args.base_url is not None:
        settings = settings.with_base_url(args.base_url)
    settings, environments = _environments(workspace, settings, args.env_file)

    logger = LoguruLogger()

    if args.command in {"compile", "curl"}:
        environment = find_environment(environments, settings.active_environment_id)
        compiled = RequestCompiler(logger=logger).compile(request, settings, environment)
        if args.command == "curl":
            print(generate_curl(compiled))
        else:
            body = compiled.body
            body_text = None
            if body is not None:
                body_text = body.text if body.text is not None else json.dumps([list(p) for p in body.fields])
            _print_compiled(compiled.method, compiled.url, compiled.headers, body_text)
        return EXIT_OK

    history = InMemoryHistoryStore()
    history.replace_all(workspace.history)
    deps = ExecutionDeps(
        http_client=RequestsSessionHttpClient(
            base_headers={"User-Agent": config.user_agent},
            timeout_sec=config.timeout_sec,
            verify_tls=config.verify_tls,
        ),
        history=history,
        logger=logger,
    )
    result = RequestExecutor().execute(request, settings, environments, deps)
    record = result.record

    if record.error:
        print(f"ERROR: {record.error} ({record.time} ms)")
        return EXIT_DISPATCH_FAILED

    print(f"{record.status} {record.status_text}  {record.time} ms  {format_bytes(record.size)}")
    for name, value in record.headers.items():
        print(f"{name}: {value}")
    print()
    print(record.formatted_body or "")
    return EXIT_OK


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:])

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_USAGE)

    config = AppConfig.from_env()
    setup_console_logging(level=config.log_level)

    try:
        exit_code = _run(args, config)
    except InvalidUrlError as exc:
        print(f"ERROR: {exc}")
        sys.exit(EXIT_USAGE)
    except WorkspaceLoadError as exc:
        print(f"ERROR: {exc}")
        for message in exc.errors:
            print(f"  - {message}")
        sys.exit(EXIT_USAGE)
    except (ValueError, FileNotFoundError) as exc:
        print(f"ERROR: {exc}")
        sys.exit(EXIT_USAGE)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
