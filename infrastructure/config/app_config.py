# infrastructure/config/app_config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_USER_AGENT = "RequestComposer/1.0"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Invalid boolean value: {raw}")


@dataclass(frozen=True)
class AppConfig:
    timeout_sec: float = 30.0
    log_level: str = "INFO"
    verify_tls: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        timeout_raw = env.get("COMPOSER_TIMEOUT_SEC")
        try:
            timeout = float(timeout_raw) if timeout_raw else cls.timeout_sec
        except ValueError as e:
            raise ValueError(f"Invalid COMPOSER_TIMEOUT_SEC: {timeout_raw}") from e
        if timeout <= 0:
            raise ValueError(f"COMPOSER_TIMEOUT_SEC must be positive: {timeout_raw}")
        return cls(
            timeout_sec=timeout,
            log_level=(env.get("COMPOSER_LOG_LEVEL") or cls.log_level).upper(),
            verify_tls=_flag(env.get("COMPOSER_VERIFY_TLS"), cls.verify_tls),
            user_agent=env.get("COMPOSER_USER_AGENT") or cls.user_agent,
        )


def load_app_config(env_file: Optional[Path] = None) -> AppConfig:
    """Load .env (when present) into the process environment, then read AppConfig."""
    path = env_file or Path.cwd() / ".env"
    if path.exists():
        load_dotenv(path)
    return AppConfig.from_env()
