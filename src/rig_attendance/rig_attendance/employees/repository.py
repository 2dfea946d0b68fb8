from __future__ import annotations

from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee


class EmployeeRepository(Protocol):
    """Employee directory.

    Listings are ordered by (designation_order ASC, name ASC); the export and the
    month views depend on that order for stable row numbering.
    """

    def get_by_id(self, employee_pk: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_for_workspace(self, workspace_id: str) -> Sequence[Employee]:
        raise NotImplementedError

    def list_active(self, workspace_id: str) -> Sequence[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        workspace_id: str,
        name: str,
        designation: Optional[str],
        designation_order: int,
        status: EmployeeStatus,
    ) -> Employee:
        raise NotImplementedError

    def update(
        self,
        employee_pk: int,
        *,
        name: str,
        designation: Optional[str],
        designation_order: int,
        status: EmployeeStatus,
    ) -> Optional[Employee]:
        raise NotImplementedError

    def delete(self, employee_pk: int) -> bool:
        raise NotImplementedError

    def refresh_designation_orders(self, ranks: Dict[str, int], *, default_rank: int) -> int:
        """Recompute designation_order for every stored employee; returns rows changed."""

        raise NotImplementedError
