"""Workspace registry and current-selection tracking."""

from .manager import WorkspaceManager, WorkspaceNotFound, build_workspace_manager
from .models import Workspace

__all__ = ["Workspace", "WorkspaceManager", "WorkspaceNotFound", "build_workspace_manager"]
