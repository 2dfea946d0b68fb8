from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import ShiftCode
from .model import AttendanceRecord, DayStatus, ShiftAttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance record store keyed by (employee_id, month, year).

    `upsert` replaces the stored day map wholesale; callers merge with prior state first.
    """

    def get(self, employee_id: int, month: int, year: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        days: Mapping[int, DayStatus],
        total_on_duty: int,
        ot_days: int,
        remarks: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def list_for_workspace_month(self, workspace_id: str, month: int, year: int) -> Sequence[AttendanceRecord]:
        """Ordered by employee (designation_order ASC, name ASC)."""

        raise NotImplementedError


class ShiftAttendanceRepository(Protocol):
    def get(self, employee_id: int, month: int, year: int) -> Optional[ShiftAttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        days: Mapping[int, ShiftCode],
        total_on_duty: int,
    ) -> ShiftAttendanceRecord:
        raise NotImplementedError

    def list_for_workspace_month(self, workspace_id: str, month: int, year: int) -> Sequence[ShiftAttendanceRecord]:
        raise NotImplementedError


class AttendanceUnitOfWork(Protocol):
    """Writes an attendance record and its shift record in one transaction."""

    def save(self, attendance: AttendanceRecord, shifts: Optional[ShiftAttendanceRecord]) -> AttendanceRecord:
        raise NotImplementedError
