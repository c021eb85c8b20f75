# infrastructure/workspace/__init__.py
"""Workspace files (exports and hand-written collections) read from disk."""
from infrastructure.workspace.base_loader import WorkspaceLoadError, WorkspaceLoaderBase
from infrastructure.workspace.json_loader import JsonWorkspaceLoader
from infrastructure.workspace.loader_registry import WorkspaceLoaderRegistry
from infrastructure.workspace.yaml_loader import YamlWorkspaceLoader

__all__ = [
    "JsonWorkspaceLoader",
    "WorkspaceLoadError",
    "WorkspaceLoaderBase",
    "WorkspaceLoaderRegistry",
    "YamlWorkspaceLoader",
]
