# infrastructure/workspace/yaml_loader.py
"""
YAML workspace files. Same structure as the JSON export, handy for
hand-written collections.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from infrastructure.workspace.base_loader import WorkspaceLoadError, WorkspaceLoaderBase


class YamlWorkspaceLoader(WorkspaceLoaderBase):
    def _load_file(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise WorkspaceLoadError(f"Failed to parse YAML file: {path}") from e
