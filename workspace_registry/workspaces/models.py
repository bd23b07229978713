from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class Workspace:
    name: str
    path: Path

    def __post_init__(self) -> None:
        # Kept as given: the path is never expanded or resolved.
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))
