# infrastructure/workspace/json_loader.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from infrastructure.workspace.base_loader import WorkspaceLoadError, WorkspaceLoaderBase


class JsonWorkspaceLoader(WorkspaceLoaderBase):
    """Exported workspaces. A UTF-8 BOM (some editors add one) is accepted."""

    def _load_file(self, path: Path) -> Any:
        text = path.read_text(encoding="utf-8-sig")
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise WorkspaceLoadError(
                f"Failed to parse JSON file: {path} (line {e.lineno}, column {e.colno}: {e.msg})"
            ) from e
