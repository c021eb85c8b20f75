# infrastructure/environments/dotenv_environment.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from domain.environment import Environment
from domain.key_value import KeyValueItem


class DotenvEnvironmentProvider:
    """
    Expose a .env file as an Environment, so {{NAME}} in a request picks up
    NAME=value from the file. Keys without a value are kept as empty strings.
    """

    def __init__(self, path: Path | str, name: Optional[str] = None):
        self._path = Path(path)
        self._name = name or self._path.name

    def load(self) -> Environment:
        if not self._path.exists():
            raise FileNotFoundError(f"Environment file not found: {self._path}")
        values = dotenv_values(self._path)
        variables = [KeyValueItem(key=k, value=v or "") for k, v in values.items()]
        return Environment(name=self._name, variables=variables, id=f"dotenv:{self._path}")
