from __future__ import annotations

from typing import Sequence

from ..core.exceptions import NotFoundError
from .model import Workspace
from .repository import WorkspaceRepository


class WorkspaceService:
    def __init__(self, workspaces: WorkspaceRepository):
        self._workspaces = workspaces

    def list_all(self) -> Sequence[Workspace]:
        return self._workspaces.list_all()

    def require(self, workspace_id: str) -> Workspace:
        workspace = self._workspaces.get_by_id(str(workspace_id))
        if not workspace:
            raise NotFoundError(f"Workspace '{workspace_id}' not found")
        return workspace
