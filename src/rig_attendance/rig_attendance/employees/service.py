from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from .designation import designation_rank
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_UNSET = object()


def _parse_status(value) -> EmployeeStatus:
    if isinstance(value, EmployeeStatus):
        return value
    try:
        return EmployeeStatus(str(value).strip())
    except ValueError:
        raise ValidationError("Status must be Active or Inactive")


def _clean_designation(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class EmployeeService:
    """Use case: manage the employee directory of a workspace."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_pk: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_pk))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_for_workspace(self, workspace_id: str) -> Sequence[Employee]:
        return self._employees.list_for_workspace(workspace_id)

    def create(
        self,
        *,
        workspace_id: str,
        name: str,
        designation: Optional[str] = None,
        status=EmployeeStatus.ACTIVE,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        designation = _clean_designation(designation)
        employee = self._employees.create(
            workspace_id=workspace_id,
            name=name,
            designation=designation,
            designation_order=designation_rank(designation),
            status=_parse_status(status),
        )
        logger.info("Created employee %s (%s) in workspace %s", employee.employee_id, employee.name, workspace_id)
        return employee

    def update(self, employee_pk: int, *, name=_UNSET, designation=_UNSET, status=_UNSET) -> Employee:
        existing = self.get(employee_pk)

        new_name = existing.name if name is _UNSET else require_non_empty(name, "Name")
        new_status = existing.status if status is _UNSET else _parse_status(status)
        if designation is _UNSET:
            new_designation = existing.designation
            order = existing.designation_order
        else:
            new_designation = _clean_designation(designation)
            order = designation_rank(new_designation)

        updated = self._employees.update(
            existing.id,
            name=new_name,
            designation=new_designation,
            designation_order=order,
            status=new_status,
        )
        if not updated:
            raise NotFoundError("Employee not found")
        return updated

    def delete(self, employee_pk: int) -> None:
        if not self._employees.delete(int(employee_pk)):
            raise NotFoundError("Employee not found")
