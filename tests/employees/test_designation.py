from __future__ import annotations

import pytest

from src.rig_attendance.rig_attendance.core.enums import EmployeeStatus
from src.rig_attendance.rig_attendance.employees.designation import designation_rank, sort_employees
from src.rig_attendance.rig_attendance.employees.model import Employee


@pytest.mark.parametrize(
    "designation,rank",
    [
        ("Rig I/C", 1),
        ("Shift I/C", 2),
        ("Asst Shift I/C", 3),
        ("Top Man", 4),
        ("Rig Man", 5),
    ],
)
def test_known_designations_rank_in_table_order(designation, rank):
    assert designation_rank(designation) == rank


@pytest.mark.parametrize("designation", [None, "", "Driller", "rig man"])
def test_unknown_or_missing_designation_sorts_last(designation):
    assert designation_rank(designation) == 999


def _employee(pk, name, designation):
    return Employee(
        id=pk,
        workspace_id="domestic",
        employee_id=str(pk).zfill(3),
        name=name,
        designation=designation,
        designation_order=designation_rank(designation),
        status=EmployeeStatus.ACTIVE,
        serial_number=pk,
    )


def test_sort_by_rank_then_name_case_sensitive():
    crew = [
        _employee(1, "bob", "Rig Man"),
        _employee(2, "Zed", "Rig Man"),
        _employee(3, "Amit", None),
        _employee(4, "Yusuf", "Rig I/C"),
    ]

    ordered = [e.name for e in sort_employees(crew)]

    assert ordered == ["Yusuf", "Zed", "bob", "Amit"]
