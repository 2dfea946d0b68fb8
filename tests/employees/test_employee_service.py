from __future__ import annotations

import pytest

from src.rig_attendance.rig_attendance.core.enums import EmployeeStatus
from src.rig_attendance.rig_attendance.core.exceptions import NotFoundError, ValidationError
from src.rig_attendance.rig_attendance.employees.service import EmployeeService


@pytest.fixture
def service(employees_repo):
    return EmployeeService(employees_repo)


def test_create_numbers_serials_per_workspace(service):
    a = service.create(workspace_id="domestic", name="Arun", designation="Rig Man")
    b = service.create(workspace_id="domestic", name="Bikram")
    c = service.create(workspace_id="ongc", name="Chandan")

    assert (a.employee_id, b.employee_id, c.employee_id) == ("001", "002", "001")
    assert a.designation_order == 5
    assert b.designation_order == 999
    assert a.status == EmployeeStatus.ACTIVE


def test_update_designation_recomputes_rank(service):
    e = service.create(workspace_id="domestic", name="Arun", designation="Rig Man")

    updated = service.update(e.id, designation="Shift I/C")

    assert updated.designation_order == 2
    assert updated.name == "Arun"


def test_update_name_only_keeps_rank(service):
    e = service.create(workspace_id="domestic", name="Arun", designation="Top Man")

    updated = service.update(e.id, name="Arun K")

    assert updated.designation_order == 4
    assert updated.designation == "Top Man"


def test_clearing_designation_sorts_last(service):
    e = service.create(workspace_id="domestic", name="Arun", designation="Top Man")

    assert service.update(e.id, designation="  ").designation_order == 999


def test_create_rejects_blank_name_and_bad_status(service):
    with pytest.raises(ValidationError):
        service.create(workspace_id="domestic", name="   ")
    with pytest.raises(ValidationError):
        service.create(workspace_id="domestic", name="Arun", status="Retired")


def test_missing_employee_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.get(42)
    with pytest.raises(NotFoundError):
        service.update(42, name="x")
    with pytest.raises(NotFoundError):
        service.delete(42)


def test_list_orders_by_rank_then_name(service):
    service.create(workspace_id="domestic", name="Zed", designation="Rig Man")
    service.create(workspace_id="domestic", name="Amit", designation="Rig I/C")
    service.create(workspace_id="domestic", name="Bala")

    assert [e.name for e in service.list_for_workspace("domestic")] == ["Amit", "Zed", "Bala"]
