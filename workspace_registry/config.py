from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from workspace_registry.schemas import WorkspaceEntry


class Settings(BaseSettings):
    """Registry configuration."""

    workspaces: list[WorkspaceEntry] = Field(default_factory=list)
    default_workspace: str | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    structured_logging: bool = False

    model_config = SettingsConfigDict(env_prefix="WSREG_", env_file=None)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
