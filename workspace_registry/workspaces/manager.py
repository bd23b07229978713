from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from workspace_registry.logging import get_registry_logger, log_workspace_operation
from workspace_registry.workspaces.models import Workspace

if TYPE_CHECKING:
    from workspace_registry.config import Settings

logger = get_registry_logger("workspaces.manager")


class WorkspaceNotFound(Exception):
    """Raised when a workspace name is not present in the registry."""

    def __init__(self, workspace: str) -> None:
        super().__init__(f"Workspace {workspace!r} not found")
        self.workspace = workspace


class WorkspaceManager:
    """Tracks a set of named workspaces and which one is current.

    Workspaces are keyed by name. ``current_workspace`` always names a key of
    the registry; it only changes through construction or a successful
    :meth:`set_current_workspace`.
    """

    def __init__(self, workspaces: Iterable[Workspace], default_workspace: str) -> None:
        """Build a registry from ``workspaces`` and select ``default_workspace``.

        Later records overwrite earlier ones that share a name. Raises
        :class:`WorkspaceNotFound` when no record is named ``default_workspace``.
        """
        workspaces = list(workspaces)
        if not any(workspace.name == default_workspace for workspace in workspaces):
            log_workspace_operation(
                logger,
                "Default workspace missing from input",
                workspace=default_workspace,
                level=logging.WARNING,
            )
            raise WorkspaceNotFound(default_workspace)

        self._workspaces: dict[str, Workspace] = {
            workspace.name: workspace for workspace in workspaces
        }
        self._current_workspace = default_workspace
        log_workspace_operation(
            logger,
            f"Workspace manager created with {len(self._workspaces)} workspace(s)",
            workspace=default_workspace,
            level=logging.DEBUG,
        )

    @classmethod
    def from_single_workspace(cls, workspace: Workspace) -> WorkspaceManager:
        """Create a manager holding only ``workspace``, selected as current."""
        return cls([workspace], workspace.name)

    @property
    def workspaces(self) -> Mapping[str, Workspace]:
        return MappingProxyType(self._workspaces)

    @property
    def current_workspace(self) -> str:
        return self._current_workspace

    def __len__(self) -> int:
        return len(self._workspaces)

    def __contains__(self, name: object) -> bool:
        try:
            return name in self._workspaces
        except TypeError:
            return False

    def get_workspace(self, name: str) -> Workspace | None:
        return self._workspaces.get(name)

    def set_current_workspace(self, name: str) -> None:
        """Select ``name`` as the current workspace.

        Raises :class:`WorkspaceNotFound` and keeps the previous selection when
        ``name`` is not registered.
        """
        if name not in self._workspaces:
            log_workspace_operation(
                logger,
                "Cannot select unknown workspace",
                workspace=name,
                level=logging.WARNING,
            )
            raise WorkspaceNotFound(name)
        self._current_workspace = name
        log_workspace_operation(logger, "Current workspace changed", workspace=name, level=logging.DEBUG)

    def get_current_workspace(self) -> Workspace:
        # KeyError here means the selection invariant was broken
        return self._workspaces[self._current_workspace]

    def add_workspace(self, workspace: Workspace) -> None:
        """Insert ``workspace``, replacing any record with the same name.

        The current selection is never changed here, even when the registry
        was empty.
        """
        replaced = workspace.name in self._workspaces
        self._workspaces[workspace.name] = workspace
        log_workspace_operation(
            logger,
            "Workspace replaced" if replaced else "Workspace added",
            workspace=workspace.name,
            level=logging.DEBUG,
        )


def build_workspace_manager(settings: Settings | None = None) -> WorkspaceManager:
    """Create a manager from configured workspaces.

    Without configured workspaces the current directory becomes the only
    workspace. Otherwise ``default_workspace`` is selected, falling back to the
    first configured entry.
    """
    if settings is None:
        from workspace_registry.config import get_settings

        settings = get_settings()

    if not settings.workspaces:
        cwd = Path.cwd()
        logger.info(f"No workspaces configured, using {cwd}")
        return WorkspaceManager.from_single_workspace(Workspace(name=cwd.name or "default", path=cwd))

    default = settings.default_workspace or settings.workspaces[0].name
    return WorkspaceManager([entry.to_workspace() for entry in settings.workspaces], default)
