# domain/auth.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthType(str, Enum):
    NONE = "none"
    BEARER = "bearer"
    API_KEY = "api-key"


class AuthLocation(str, Enum):
    HEADER = "header"
    QUERY = "query"


@dataclass(frozen=True)
class AuthConfig:
    type: AuthType = AuthType.NONE
    token: str = ""
    # api-key only
    key_name: Optional[str] = None
    add_to: Optional[AuthLocation] = None

    @property
    def effective_location(self) -> AuthLocation:
        return self.add_to or AuthLocation.QUERY


@dataclass(frozen=True)
class AuthPlacement:
    """Where a resolved credential goes on the wire."""
    location: AuthLocation
    name: str
    value: str
