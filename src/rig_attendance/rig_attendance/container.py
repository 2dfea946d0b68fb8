from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.factory import ShiftCascadeFactory
from .attendance.mysql_attendance_repository import (
    MySQLAttendanceRepository,
    MySQLAttendanceUnitOfWork,
    MySQLShiftAttendanceRepository,
)
from .attendance.repository import AttendanceRepository, AttendanceUnitOfWork, ShiftAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_EXPORT_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .export.service import ExportService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .workspaces.mysql_workspace_repository import MySQLWorkspaceRepository
from .workspaces.repository import WorkspaceRepository
from .workspaces.service import WorkspaceService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    workspaces_repo: WorkspaceRepository
    settings_repo: SettingsRepository
    attendance_repo: AttendanceRepository
    shift_attendance_repo: ShiftAttendanceRepository

    employee_service: EmployeeService
    workspace_service: WorkspaceService
    settings_service: SettingsService
    attendance_service: AttendanceService
    export_service: ExportService

    conn: Optional[DatabaseConnection] = None


def assemble_container(
    *,
    employees_repo: EmployeeRepository,
    workspaces_repo: WorkspaceRepository,
    settings_repo: SettingsRepository,
    attendance_repo: AttendanceRepository,
    shift_attendance_repo: ShiftAttendanceRepository,
    unit_of_work: Optional[AttendanceUnitOfWork] = None,
    export_timeout_seconds: float = DEFAULT_EXPORT_TIMEOUT_SECONDS,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, in-memory in tests)."""
    attendance_service = AttendanceService(
        attendance_repo,
        shift_attendance_repo,
        employees_repo,
        unit_of_work=unit_of_work,
        cascade_factory=ShiftCascadeFactory(),
    )
    export_service = ExportService(
        employees_repo,
        attendance_repo,
        shift_attendance_repo,
        settings_repo,
        clock=clock,
        timeout_seconds=export_timeout_seconds,
    )

    return Container(
        employees_repo=employees_repo,
        workspaces_repo=workspaces_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        shift_attendance_repo=shift_attendance_repo,
        employee_service=EmployeeService(employees_repo),
        workspace_service=WorkspaceService(workspaces_repo),
        settings_service=SettingsService(settings_repo),
        attendance_service=attendance_service,
        export_service=export_service,
        conn=conn,
    )


def build_container(*, db_config: dict, export_timeout_seconds: float = DEFAULT_EXPORT_TIMEOUT_SECONDS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble_container(
        employees_repo=MySQLEmployeeRepository(conn),
        workspaces_repo=MySQLWorkspaceRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        shift_attendance_repo=MySQLShiftAttendanceRepository(conn),
        unit_of_work=MySQLAttendanceUnitOfWork(conn),
        export_timeout_seconds=export_timeout_seconds,
        conn=conn,
    )
