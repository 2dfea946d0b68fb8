from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Workspace:
    """A site/tenant; every employee and month record is scoped to one."""

    workspace_id: str
    name: str
