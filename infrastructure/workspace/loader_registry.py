# infrastructure/workspace/loader_registry.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from application.services.workspace_codec import Workspace
from infrastructure.workspace.base_loader import WorkspaceLoadError, WorkspaceLoaderBase
from infrastructure.workspace.json_loader import JsonWorkspaceLoader
from infrastructure.workspace.yaml_loader import YamlWorkspaceLoader


class WorkspaceLoaderRegistry:
    """Picks a workspace loader from the file suffix (exports are .json, hand-written collections often .yaml)."""

    def __init__(self) -> None:
        yaml_loader = YamlWorkspaceLoader()
        self._loaders: Dict[str, WorkspaceLoaderBase] = {
            ".json": JsonWorkspaceLoader(),
            ".yaml": yaml_loader,
            ".yml": yaml_loader,
        }

    @property
    def suffixes(self) -> List[str]:
        return list(self._loaders)

    def get_loader(self, path: Path) -> WorkspaceLoaderBase:
        suffix = path.suffix.lower()
        loader = self._loaders.get(suffix)
        if loader is None:
            expected = ", ".join(self.suffixes)
            raise WorkspaceLoadError(f"Unsupported workspace format: {suffix or path.name} (expected {expected})")
        return loader

    def load(self, path: Path | str) -> Workspace:
        workspace_path = Path(path)
        return self.get_loader(workspace_path).load_from_file(workspace_path)
