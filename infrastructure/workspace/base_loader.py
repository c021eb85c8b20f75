# infrastructure/workspace/base_loader.py
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

from application.services.import_merger import load_workspace
from application.services.workspace_codec import Workspace
from domain.exceptions import ImportValidationError


class WorkspaceLoadError(Exception):
    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        self.errors = list(errors or [])
        super().__init__(message)


class WorkspaceLoaderBase(ABC):
    def load_from_file(self, path: Path | str) -> Workspace:
        p = Path(path)
        if not p.exists():
            raise WorkspaceLoadError(f"Workspace file not found: {path}")

        data = self._load_file(p)
        if data is None:
            raise WorkspaceLoadError(f"Workspace file is empty: {path}")

        return self.load_from_dict(data)

    def load_from_dict(self, data: Any) -> Workspace:
        try:
            return load_workspace(data)
        except ImportValidationError as e:
            raise WorkspaceLoadError(f"Workspace file is invalid: {e}", errors=e.errors) from e

    @abstractmethod
    def _load_file(self, path: Path) -> Any:
        ...
