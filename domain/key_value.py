# domain/key_value.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import List, Sequence


def new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class KeyValueItem:
    key: str = ""
    value: str = ""
    enabled: bool = True
    id: str = field(default_factory=new_item_id)

    def is_blank(self) -> bool:
        return self.key == "" and self.value == ""


def blank_rows() -> List[KeyValueItem]:
    return [KeyValueItem()]


def ensure_trailing_blank(items: Sequence[KeyValueItem]) -> List[KeyValueItem]:
    """
    Editing invariant: the list ends with exactly one fully-empty row.

    Extra blank rows at the tail collapse into one; blank rows in the middle
    are left where the user put them.
    """
    out = list(items)
    while len(out) >= 2 and out[-1].is_blank() and out[-2].is_blank():
        out.pop()
    if not out or not out[-1].is_blank():
        out.append(KeyValueItem())
    return out
