from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Tuple

import pytest

from src.rig_attendance.rig_attendance.attendance.day_map import (
    decode_attendance_map,
    decode_shift_map,
    encode_day_map,
)
from src.rig_attendance.rig_attendance.attendance.model import AttendanceRecord, ShiftAttendanceRecord
from src.rig_attendance.rig_attendance.attendance.service import AttendanceService
from src.rig_attendance.rig_attendance.common.datetime_utils import days_in_month
from src.rig_attendance.rig_attendance.common.validators import require_month_year
from src.rig_attendance.rig_attendance.container import assemble_container
from src.rig_attendance.rig_attendance.core.constants import DEFAULT_WORKSPACES, EMPLOYEE_ID_WIDTH
from src.rig_attendance.rig_attendance.core.enums import EmployeeStatus
from src.rig_attendance.rig_attendance.core.exceptions import StorageError
from src.rig_attendance.rig_attendance.employees.designation import designation_rank, sort_employees
from src.rig_attendance.rig_attendance.employees.model import Employee
from src.rig_attendance.rig_attendance.export.service import ExportService
from src.rig_attendance.rig_attendance.settings.model import AppSettings
from src.rig_attendance.rig_attendance.workspaces.model import Workspace

Key = Tuple[int, int, int]


class FakeEmployeeRepo:
    def __init__(self):
        self._next_id = 1
        self._rows: Dict[int, Employee] = {}

    def get_by_id(self, employee_pk):
        return self._rows.get(int(employee_pk))

    def list_for_workspace(self, workspace_id):
        return sort_employees(e for e in self._rows.values() if e.workspace_id == workspace_id)

    def list_active(self, workspace_id):
        return [e for e in self.list_for_workspace(workspace_id) if e.status == EmployeeStatus.ACTIVE]

    def create(self, *, workspace_id, name, designation, designation_order, status):
        serial = 1 + max((e.serial_number for e in self._rows.values() if e.workspace_id == workspace_id), default=0)
        employee = Employee(
            id=self._next_id,
            workspace_id=workspace_id,
            employee_id=str(serial).zfill(EMPLOYEE_ID_WIDTH),
            name=name,
            designation=designation,
            designation_order=designation_order,
            status=status,
            serial_number=serial,
        )
        self._rows[employee.id] = employee
        self._next_id += 1
        return employee

    def update(self, employee_pk, *, name, designation, designation_order, status):
        existing = self._rows.get(int(employee_pk))
        if not existing:
            return None
        updated = Employee(
            id=existing.id,
            workspace_id=existing.workspace_id,
            employee_id=existing.employee_id,
            name=name,
            designation=designation,
            designation_order=designation_order,
            status=status,
            serial_number=existing.serial_number,
        )
        self._rows[existing.id] = updated
        return updated

    def delete(self, employee_pk):
        return self._rows.pop(int(employee_pk), None) is not None

    def refresh_designation_orders(self, ranks, *, default_rank):
        return 0


class FakeWorkspaceRepo:
    def __init__(self):
        self._rows = {k: Workspace(workspace_id=k, name=v) for k, v in DEFAULT_WORKSPACES.items()}

    def list_all(self):
        return sorted(self._rows.values(), key=lambda w: w.name)

    def get_by_id(self, workspace_id):
        return self._rows.get(workspace_id)


class FakeSettingsRepo:
    def __init__(self):
        self.settings = AppSettings()

    def get(self):
        return self.settings

    def save(self, settings):
        self.settings = settings
        return settings


class FakeAttendanceRepo:
    """Stores the day map as JSON text, like the MySQL column, so reads go through the codec."""

    def __init__(self, employees: FakeEmployeeRepo):
        self._employees = employees
        self.rows: Dict[Key, dict] = {}
        self.upserts = 0

    def _to_record(self, key: Key, row: dict) -> AttendanceRecord:
        return AttendanceRecord(
            employee_id=key[0],
            month=key[1],
            year=key[2],
            days=decode_attendance_map(
                row["attendance_data"], context=f"attendance {key}", last_day=days_in_month(key[1], key[2])
            ),
            total_on_duty=row["total_on_duty"],
            ot_days=row["ot_days"],
            remarks=row["remarks"],
        )

    def get(self, employee_id, month, year):
        key = (int(employee_id), int(month), int(year))
        row = self.rows.get(key)
        return self._to_record(key, row) if row else None

    def upsert(self, *, employee_id, month, year, days, total_on_duty, ot_days, remarks=None):
        month, year = require_month_year(month, year)
        self.upserts += 1
        self.rows[(int(employee_id), month, year)] = {
            "attendance_data": encode_day_map(days),
            "total_on_duty": total_on_duty,
            "ot_days": ot_days,
            "remarks": remarks,
        }
        return self.get(employee_id, month, year)

    def list_for_workspace_month(self, workspace_id, month, year):
        out = []
        for employee in self._employees.list_for_workspace(workspace_id):
            record = self.get(employee.id, month, year)
            if record:
                out.append(record)
        return out


class FakeShiftAttendanceRepo:
    def __init__(self, employees: FakeEmployeeRepo):
        self._employees = employees
        self.rows: Dict[Key, dict] = {}
        self.fail_writes = False

    def get(self, employee_id, month, year):
        key = (int(employee_id), int(month), int(year))
        row = self.rows.get(key)
        if not row:
            return None
        return ShiftAttendanceRecord(
            employee_id=key[0],
            month=key[1],
            year=key[2],
            days=decode_shift_map(row["shift_data"], context=f"shift {key}", last_day=days_in_month(key[1], key[2])),
            total_on_duty=row["total_on_duty"],
        )

    def upsert(self, *, employee_id, month, year, days, total_on_duty):
        if self.fail_writes:
            raise StorageError("Database error")
        month, year = require_month_year(month, year)
        self.rows[(int(employee_id), month, year)] = {
            "shift_data": encode_day_map(days),
            "total_on_duty": total_on_duty,
        }
        return self.get(employee_id, month, year)

    def list_for_workspace_month(self, workspace_id, month, year):
        out = []
        for employee in self._employees.list_for_workspace(workspace_id):
            record = self.get(employee.id, month, year)
            if record:
                out.append(record)
        return out


class FakeUnitOfWork:
    def __init__(self, attendance: FakeAttendanceRepo, shifts: FakeShiftAttendanceRepo):
        self._attendance = attendance
        self._shifts = shifts
        self.saved: list = []

    def save(self, attendance, shifts):
        self.saved.append((attendance, shifts))
        self._attendance.upsert(
            employee_id=attendance.employee_id,
            month=attendance.month,
            year=attendance.year,
            days=attendance.days,
            total_on_duty=attendance.total_on_duty,
            ot_days=attendance.ot_days,
            remarks=attendance.remarks,
        )
        if shifts is not None:
            self._shifts.upsert(
                employee_id=shifts.employee_id,
                month=shifts.month,
                year=shifts.year,
                days=shifts.days,
                total_on_duty=shifts.total_on_duty,
            )
        return attendance


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 14, 9, 0, 0)


@pytest.fixture
def employees_repo():
    return FakeEmployeeRepo()


@pytest.fixture
def workspaces_repo():
    return FakeWorkspaceRepo()


@pytest.fixture
def settings_repo():
    return FakeSettingsRepo()


@pytest.fixture
def attendance_repo(employees_repo):
    return FakeAttendanceRepo(employees_repo)


@pytest.fixture
def shift_repo(employees_repo):
    return FakeShiftAttendanceRepo(employees_repo)


@pytest.fixture
def unit_of_work(attendance_repo, shift_repo):
    return FakeUnitOfWork(attendance_repo, shift_repo)


@pytest.fixture
def add_employee(employees_repo):
    def _add(name: str, designation: Optional[str] = None, *, status=EmployeeStatus.ACTIVE, workspace_id="domestic"):
        return employees_repo.create(
            workspace_id=workspace_id,
            name=name,
            designation=designation,
            designation_order=designation_rank(designation),
            status=status,
        )

    return _add


@pytest.fixture
def attendance_service(attendance_repo, shift_repo, employees_repo):
    return AttendanceService(attendance_repo, shift_repo, employees_repo)


@pytest.fixture
def export_service(employees_repo, attendance_repo, shift_repo, settings_repo, fixed_now):
    return ExportService(employees_repo, attendance_repo, shift_repo, settings_repo, clock=lambda: fixed_now)


@pytest.fixture
def container(employees_repo, workspaces_repo, settings_repo, attendance_repo, shift_repo, unit_of_work, fixed_now):
    return assemble_container(
        employees_repo=employees_repo,
        workspaces_repo=workspaces_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        shift_attendance_repo=shift_repo,
        unit_of_work=unit_of_work,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.rig_attendance.rig_attendance.main import create_app

    app = create_app(container)
    return app.test_client()
