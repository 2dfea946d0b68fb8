from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Workspace
from .repository import WorkspaceRepository


class MySQLWorkspaceRepository(WorkspaceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Workspace]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT workspace_id, name FROM workspaces ORDER BY name ASC")
            return [Workspace(workspace_id=r["workspace_id"], name=r["name"]) for r in fetchall(cur)]

    def get_by_id(self, workspace_id: str) -> Optional[Workspace]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT workspace_id, name FROM workspaces WHERE workspace_id=%s", (workspace_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Workspace(workspace_id=r["workspace_id"], name=r["name"])
