# domain/environment.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from domain.key_value import KeyValueItem, new_item_id


@dataclass(frozen=True)
class Environment:
    name: str
    variables: List[KeyValueItem] = field(default_factory=list)
    id: str = field(default_factory=new_item_id)


def find_environment(environments: Sequence[Environment], env_id: Optional[str]) -> Optional[Environment]:
    if env_id is None:
        return None
    for env in environments:
        if env.id == env_id:
            return env
    return None
