# application/services/variable_resolver.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from domain.environment import Environment
from domain.key_value import KeyValueItem

OPEN = "{{"
CLOSE = "}}"


def variables_of(environment: Optional[Environment]) -> Optional[List[KeyValueItem]]:
    return None if environment is None else list(environment.variables)


class VariableResolver:
    """
    Expand {{name}} references from the active environment's variables.

    - Only enabled variables with a non-empty key take part; when a key repeats,
      the last enabled one wins.
    - Unknown names and unclosed markers are left verbatim.
    - Single pass: a substituted value is not scanned again.
    """

    def __init__(self, variables: Optional[Sequence[KeyValueItem]] = None):
        self._lookup: Optional[Dict[str, str]] = self._build_lookup(variables)

    @classmethod
    def for_environment(cls, environment: Optional[Environment]) -> "VariableResolver":
        return cls(variables_of(environment))

    def __call__(self, text: str) -> str:
        return self.render(text)

    def render(self, text: Optional[str]) -> str:
        if text is None:
            return ""
        if self._lookup is None or OPEN not in text:
            return text

        result = ""
        i = 0
        while i < len(text):
            start = text.find(OPEN, i)
            if start < 0:
                result += text[i:]
                break
            end = text.find(CLOSE, start + len(OPEN))
            if end < 0:
                result += text[i:]
                break
            result += text[i:start]
            name = text[start + len(OPEN) : end].strip()
            if name in self._lookup:
                result += self._lookup[name]
            else:
                result += text[start : end + len(CLOSE)]
            i = end + len(CLOSE)

        return result

    def unresolved(self, text: Optional[str]) -> List[str]:
        names = find_references(text)
        lookup = self._lookup or {}
        return [n for n in names if n not in lookup]

    @staticmethod
    def _build_lookup(variables: Optional[Sequence[KeyValueItem]]) -> Optional[Dict[str, str]]:
        if variables is None:
            return None
        lookup: Dict[str, str] = {}
        for item in variables:
            if item.enabled and item.key.strip():
                lookup[item.key.strip()] = item.value
        return lookup


def resolve(text: str, variables: Optional[Sequence[KeyValueItem]]) -> str:
    return VariableResolver(variables).render(text)


def find_references(text: Optional[str]) -> List[str]:
    """Names referenced as {{name}} in `text`, in order of first appearance."""
    if not text:
        return []
    names: List[str] = []
    i = 0
    while True:
        start = text.find(OPEN, i)
        if start < 0:
            break
        end = text.find(CLOSE, start + len(OPEN))
        if end < 0:
            break
        name = text[start + len(OPEN) : end].strip()
        if name and name not in names:
            names.append(name)
        i = end + len(CLOSE)
    return names
