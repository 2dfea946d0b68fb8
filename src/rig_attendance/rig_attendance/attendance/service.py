from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Iterable, Optional, Sequence

from ..common.validators import require_day, require_day_range, require_int, require_month_year
from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..employees.repository import EmployeeRepository
from .day_map import parse_shift_input, parse_status_input
from .derivation import apply_shift, apply_status, can_enter_shift, overtime_days, present_days, shift_on_duty
from .factory import ShiftCascadeFactory
from .locks import KeyedLocks
from .model import AttendanceRecord, DayMap, ShiftAttendanceRecord
from .repository import AttendanceRepository, AttendanceUnitOfWork, ShiftAttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationTask:
    """A shift write that failed after its attendance write had committed."""

    shifts: ShiftAttendanceRecord
    error: str


def _with_counters(base: AttendanceRecord, days: DayMap, *, remarks: Optional[str]) -> AttendanceRecord:
    return AttendanceRecord(
        employee_id=base.employee_id,
        month=base.month,
        year=base.year,
        days=days,
        total_on_duty=present_days(days),
        ot_days=overtime_days(days),
        remarks=remarks,
    )


class AttendanceService:
    """Use cases: record attendance and shifts for one employee-month.

    Every write is a read-modify-write of the sparse day maps, serialized per
    (employee_id, month, year). Counters are always recomputed from the map.

    With a unit of work the attendance and shift writes commit together. Without one
    the attendance write commits first; a failing shift write is logged and queued in
    `pending_reconciliation` (the attendance write is kept).
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftAttendanceRepository,
        employees: EmployeeRepository,
        *,
        unit_of_work: Optional[AttendanceUnitOfWork] = None,
        cascade_factory: Optional[ShiftCascadeFactory] = None,
        locks: Optional[KeyedLocks] = None,
    ):
        self._attendance = attendance
        self._shifts = shifts
        self._employees = employees
        self._uow = unit_of_work
        self._factory = cascade_factory or ShiftCascadeFactory()
        self._locks = locks if locks is not None else KeyedLocks()
        self.pending_reconciliation: Deque[ReconciliationTask] = deque()

    # ----- reads -----

    def get_record(self, employee_id: int, month: int, year: int) -> AttendanceRecord:
        month, year = require_month_year(month, year)
        return self._attendance.get(int(employee_id), month, year) or AttendanceRecord.empty(employee_id, month, year)

    def get_shift_record(self, employee_id: int, month: int, year: int) -> ShiftAttendanceRecord:
        month, year = require_month_year(month, year)
        return self._shifts.get(int(employee_id), month, year) or ShiftAttendanceRecord.empty(employee_id, month, year)

    def list_month(self, workspace_id: str, month: int, year: int) -> Sequence[AttendanceRecord]:
        month, year = require_month_year(month, year)
        return self._attendance.list_for_workspace_month(workspace_id, month, year)

    def list_shift_month(self, workspace_id: str, month: int, year: int) -> Sequence[ShiftAttendanceRecord]:
        month, year = require_month_year(month, year)
        return self._shifts.list_for_workspace_month(workspace_id, month, year)

    def can_enter_shift(self, employee_id: int, month: int, year: int, day: int) -> bool:
        record = self.get_record(employee_id, month, year)
        return can_enter_shift(record.days, require_day(day, month=record.month, year=record.year))

    # ----- attendance writes (with shift cascade) -----

    def record_attendance_day(
        self,
        *,
        employee_id: Any,
        month: Any,
        year: Any,
        day: Any,
        status: Any,
        shift: Any = None,
    ) -> AttendanceRecord:
        month, year = require_month_year(month, year)
        day = require_day(day, month=month, year=year)
        return self._record_attendance(employee_id, month, year, [day], status, shift)

    def record_attendance_range(
        self,
        *,
        employee_id: Any,
        month: Any,
        year: Any,
        start_day: Any,
        end_day: Any,
        status: Any,
        shift: Any = None,
    ) -> AttendanceRecord:
        month, year = require_month_year(month, year)
        days = require_day_range(start_day, end_day, month=month, year=year)
        return self._record_attendance(employee_id, month, year, list(days), status, shift)

    def update_remarks(self, *, employee_id: Any, month: Any, year: Any, remarks: Optional[str]) -> AttendanceRecord:
        month, year = require_month_year(month, year)
        employee_id = self._require_employee(employee_id)
        remarks = (remarks or "").strip() or None

        with self._locks.hold((employee_id, month, year)):
            current = self._attendance.get(employee_id, month, year) or AttendanceRecord.empty(employee_id, month, year)
            updated = _with_counters(current, dict(current.days), remarks=remarks)
            self._save_attendance(updated)
            return updated

    def _record_attendance(
        self,
        employee_id: Any,
        month: int,
        year: int,
        days: Iterable[int],
        status: Any,
        shift: Any,
    ) -> AttendanceRecord:
        status = parse_status_input(status)
        shift = parse_shift_input(shift)
        employee_id = self._require_employee(employee_id)
        days = list(days)

        with self._locks.hold((employee_id, month, year)):
            current = self._attendance.get(employee_id, month, year) or AttendanceRecord.empty(employee_id, month, year)
            day_map: DayMap = dict(current.days)
            for day in days:
                apply_status(day_map, day, status)
            updated = _with_counters(current, day_map, remarks=current.remarks)

            strategy = self._factory.for_status(status=status, shift=shift)
            shift_record: Optional[ShiftAttendanceRecord] = None
            if strategy.touches_shifts:
                existing = self._shifts.get(employee_id, month, year) or ShiftAttendanceRecord.empty(employee_id, month, year)
                shift_map = dict(existing.days)
                strategy.apply(days=day_map, shifts=shift_map, changed_days=days)
                if shift_map != existing.days:
                    shift_record = ShiftAttendanceRecord(
                        employee_id=employee_id,
                        month=month,
                        year=year,
                        days=shift_map,
                        total_on_duty=shift_on_duty(shift_map),
                    )

            self._commit(updated, shift_record)
            logger.debug(
                "Recorded %s for employee=%s %s/%s days=%s-%s",
                status.value if status else "blank",
                employee_id,
                month,
                year,
                days[0],
                days[-1],
            )
            return updated

    def _save_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        return self._attendance.upsert(
            employee_id=record.employee_id,
            month=record.month,
            year=record.year,
            days=record.days,
            total_on_duty=record.total_on_duty,
            ot_days=record.ot_days,
            remarks=record.remarks,
        )

    def _save_shifts(self, record: ShiftAttendanceRecord) -> ShiftAttendanceRecord:
        return self._shifts.upsert(
            employee_id=record.employee_id,
            month=record.month,
            year=record.year,
            days=record.days,
            total_on_duty=record.total_on_duty,
        )

    def _commit(self, attendance: AttendanceRecord, shifts: Optional[ShiftAttendanceRecord]) -> None:
        if self._uow is not None:
            self._uow.save(attendance, shifts)
            return

        self._save_attendance(attendance)
        if shifts is None:
            return
        try:
            self._save_shifts(shifts)
        except StorageError as e:
            logger.error(
                "Shift cascade failed for employee=%s %s/%s after attendance was saved: %s",
                shifts.employee_id,
                shifts.month,
                shifts.year,
                e,
            )
            self.pending_reconciliation.append(ReconciliationTask(shifts=shifts, error=str(e)))

    def reconcile_pending(self) -> int:
        """Retry queued shift writes against the current attendance. Returns how many succeeded."""
        done = 0
        for _ in range(len(self.pending_reconciliation)):
            task = self.pending_reconciliation.popleft()
            target = task.shifts
            key = (target.employee_id, target.month, target.year)
            with self._locks.hold(key):
                attendance = self._attendance.get(*key) or AttendanceRecord.empty(*key)
                shift_map = {d: s for d, s in target.days.items() if can_enter_shift(attendance.days, d)}
                record = ShiftAttendanceRecord(
                    employee_id=target.employee_id,
                    month=target.month,
                    year=target.year,
                    days=shift_map,
                    total_on_duty=shift_on_duty(shift_map),
                )
                try:
                    self._save_shifts(record)
                except StorageError as e:
                    logger.warning("Reconciliation still failing for employee=%s %s/%s: %s", *key, e)
                    self.pending_reconciliation.append(ReconciliationTask(shifts=record, error=str(e)))
                    continue
            done += 1
        return done

    # ----- shift-only writes -----

    def record_shift_day(self, *, employee_id: Any, month: Any, year: Any, day: Any, shift: Any) -> ShiftAttendanceRecord:
        month, year = require_month_year(month, year)
        day = require_day(day, month=month, year=year)
        return self._record_shifts(employee_id, month, year, [day], shift, strict=True)

    def record_shift_range(
        self,
        *,
        employee_id: Any,
        month: Any,
        year: Any,
        start_day: Any,
        end_day: Any,
        shift: Any,
    ) -> ShiftAttendanceRecord:
        month, year = require_month_year(month, year)
        days = require_day_range(start_day, end_day, month=month, year=year)
        return self._record_shifts(employee_id, month, year, list(days), shift, strict=False)

    def _record_shifts(
        self,
        employee_id: Any,
        month: int,
        year: int,
        days: Sequence[int],
        shift: Any,
        *,
        strict: bool,
    ) -> ShiftAttendanceRecord:
        shift = parse_shift_input(shift)
        employee_id = self._require_employee(employee_id)

        with self._locks.hold((employee_id, month, year)):
            attendance = self._attendance.get(employee_id, month, year) or AttendanceRecord.empty(employee_id, month, year)
            existing = self._shifts.get(employee_id, month, year) or ShiftAttendanceRecord.empty(employee_id, month, year)
            shift_map = dict(existing.days)
            skipped = 0
            for day in days:
                if shift is not None and not can_enter_shift(attendance.days, day):
                    if strict:
                        raise ValidationError(
                            f"Day {day}: a shift can only be recorded on a Present or Overtime day"
                        )
                    skipped += 1
                    continue
                apply_shift(shift_map, day, shift)

            if skipped:
                logger.debug("Skipped %d non-working day(s) for employee=%s %s/%s", skipped, employee_id, month, year)

            record = ShiftAttendanceRecord(
                employee_id=employee_id,
                month=month,
                year=year,
                days=shift_map,
                total_on_duty=shift_on_duty(shift_map),
            )
            self._save_shifts(record)
            return record

    # ----- helpers -----

    def _require_employee(self, employee_id: Any) -> int:
        employee_id = require_int(employee_id, "Employee")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        return employee_id

