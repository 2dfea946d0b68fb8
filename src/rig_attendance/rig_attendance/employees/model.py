from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: a crew member within one workspace.

    `designation_order` is denormalized from the designation so listings can sort by
    (designation_order, name) directly in SQL.
    """

    id: int
    workspace_id: str
    employee_id: str
    name: str
    designation: Optional[str]
    designation_order: int
    status: EmployeeStatus
    serial_number: int

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
