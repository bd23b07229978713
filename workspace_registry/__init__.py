"""In-memory registry of named workspaces with a current selection."""

__version__ = "0.1.0"

from workspace_registry.workspaces import (
    Workspace,
    WorkspaceManager,
    WorkspaceNotFound,
    build_workspace_manager,
)

__all__ = [
    "Workspace",
    "WorkspaceManager",
    "WorkspaceNotFound",
    "build_workspace_manager",
]
