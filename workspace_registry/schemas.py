from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from workspace_registry.workspaces.models import Workspace


class WorkspaceEntry(BaseModel):
    name: str = Field(..., min_length=1, description="Unique workspace name")
    path: Path = Field(..., description="Filesystem location, stored as given")

    def to_workspace(self) -> Workspace:
        return Workspace(name=self.name, path=self.path)
