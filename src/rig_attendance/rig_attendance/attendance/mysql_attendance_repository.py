from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import days_in_month
from ..common.validators import require_month_year
from ..core.enums import ShiftCode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .day_map import decode_attendance_map, decode_shift_map, encode_day_map
from .model import AttendanceRecord, DayStatus, ShiftAttendanceRecord
from .repository import AttendanceRepository, AttendanceUnitOfWork, ShiftAttendanceRepository


def _to_attendance(r: Dict[str, Any]) -> AttendanceRecord:
    context = f"attendance employee={r['employee_id']} {r['month']}/{r['year']}"
    return AttendanceRecord(
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        days=decode_attendance_map(
            r.get("attendance_data"), context=context, last_day=days_in_month(r["month"], r["year"])
        ),
        total_on_duty=int(r.get("total_on_duty") or 0),
        ot_days=int(r.get("ot_days") or 0),
        remarks=r.get("remarks"),
    )


def _to_shift(r: Dict[str, Any]) -> ShiftAttendanceRecord:
    context = f"shift employee={r['employee_id']} {r['month']}/{r['year']}"
    return ShiftAttendanceRecord(
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        days=decode_shift_map(r.get("shift_data"), context=context, last_day=days_in_month(r["month"], r["year"])),
        total_on_duty=int(r.get("total_on_duty") or 0),
    )


def _write_attendance(cur, record: AttendanceRecord) -> None:
    cur.execute(
        """
        INSERT INTO attendance_records(employee_id, month, year, attendance_data, total_on_duty, ot_days, remarks)
        VALUES(%s,%s,%s,%s,%s,%s,%s)
        ON DUPLICATE KEY UPDATE
            attendance_data=VALUES(attendance_data),
            total_on_duty=VALUES(total_on_duty),
            ot_days=VALUES(ot_days),
            remarks=VALUES(remarks)
        """,
        (
            int(record.employee_id),
            int(record.month),
            int(record.year),
            encode_day_map(record.days),
            int(record.total_on_duty),
            int(record.ot_days),
            record.remarks,
        ),
    )


def _write_shift(cur, record: ShiftAttendanceRecord) -> None:
    cur.execute(
        """
        INSERT INTO shift_attendance_records(employee_id, month, year, shift_data, total_on_duty)
        VALUES(%s,%s,%s,%s,%s)
        ON DUPLICATE KEY UPDATE
            shift_data=VALUES(shift_data),
            total_on_duty=VALUES(total_on_duty)
        """,
        (
            int(record.employee_id),
            int(record.month),
            int(record.year),
            encode_day_map(record.days),
            int(record.total_on_duty),
        ),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int, month: int, year: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, month, year, attendance_data, total_on_duty, ot_days, remarks
                FROM attendance_records
                WHERE employee_id=%s AND month=%s AND year=%s
                """,
                (int(employee_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _to_attendance(r) if r else None

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
        month, year = require_month_year(month, year)
        record = AttendanceRecord(
            employee_id=int(employee_id),
            month=month,
            year=year,
            days=dict(days),
            total_on_duty=int(total_on_duty),
            ot_days=int(ot_days),
            remarks=remarks,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            _write_attendance(cur, record)
        return record

    def list_for_workspace_month(self, workspace_id: str, month: int, year: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ar.employee_id, ar.month, ar.year, ar.attendance_data, ar.total_on_duty, ar.ot_days, ar.remarks
                FROM attendance_records ar
                JOIN employees e ON e.id = ar.employee_id
                WHERE e.workspace_id=%s AND ar.month=%s AND ar.year=%s
                ORDER BY e.designation_order ASC, e.name ASC
                """,
                (workspace_id, int(month), int(year)),
            )
            return [_to_attendance(r) for r in fetchall(cur)]


class MySQLShiftAttendanceRepository(ShiftAttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int, month: int, year: int) -> Optional[ShiftAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, month, year, shift_data, total_on_duty
                FROM shift_attendance_records
                WHERE employee_id=%s AND month=%s AND year=%s
                """,
                (int(employee_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def upsert(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        days: Mapping[int, ShiftCode],
        total_on_duty: int,
    ) -> ShiftAttendanceRecord:
        month, year = require_month_year(month, year)
        record = ShiftAttendanceRecord(
            employee_id=int(employee_id),
            month=month,
            year=year,
            days=dict(days),
            total_on_duty=int(total_on_duty),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            _write_shift(cur, record)
        return record

    def list_for_workspace_month(self, workspace_id: str, month: int, year: int) -> Sequence[ShiftAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT sar.employee_id, sar.month, sar.year, sar.shift_data, sar.total_on_duty
                FROM shift_attendance_records sar
                JOIN employees e ON e.id = sar.employee_id
                WHERE e.workspace_id=%s AND sar.month=%s AND sar.year=%s
                ORDER BY e.designation_order ASC, e.name ASC
                """,
                (workspace_id, int(month), int(year)),
            )
            return [_to_shift(r) for r in fetchall(cur)]


class MySQLAttendanceUnitOfWork(AttendanceUnitOfWork):
    """Attendance + shift upserts committed (or rolled back) together."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, attendance: AttendanceRecord, shifts: Optional[ShiftAttendanceRecord]) -> AttendanceRecord:
        require_month_year(attendance.month, attendance.year)
        with db_cursor(self._conn_factory) as (_, cur):
            _write_attendance(cur, attendance)
            if shifts is not None:
                _write_shift(cur, shifts)
        return attendance
