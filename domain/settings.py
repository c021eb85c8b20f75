# domain/settings.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from domain.auth import AuthConfig


@dataclass(frozen=True)
class GlobalSettings:
    base_url: str = ""
    global_auth: AuthConfig = field(default_factory=AuthConfig)
    active_environment_id: Optional[str] = None

    def with_base_url(self, base_url: str) -> "GlobalSettings":
        return replace(self, base_url=base_url)

    def with_active_environment(self, env_id: Optional[str]) -> "GlobalSettings":
        return replace(self, active_environment_id=env_id)
