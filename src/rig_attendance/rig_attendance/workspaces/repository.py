from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Workspace


class WorkspaceRepository(Protocol):
    def list_all(self) -> Sequence[Workspace]:
        raise NotImplementedError

    def get_by_id(self, workspace_id: str) -> Optional[Workspace]:
        raise NotImplementedError
