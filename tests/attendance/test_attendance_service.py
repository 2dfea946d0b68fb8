from __future__ import annotations

import threading

import pytest

from src.rig_attendance.rig_attendance.attendance.service import AttendanceService
from src.rig_attendance.rig_attendance.core.enums import AttendanceStatus as S
from src.rig_attendance.rig_attendance.core.enums import ShiftCode
from src.rig_attendance.rig_attendance.core.exceptions import CorruptDataWarning, NotFoundError, ValidationError


@pytest.fixture
def crew(add_employee):
    return add_employee("Arun", "Rig Man")


def _day(service, employee, day, status, shift=None, month=2, year=2024):
    return service.record_attendance_day(
        employee_id=employee.id, month=month, year=year, day=day, status=status, shift=shift
    )


def test_set_day_recomputes_counters(attendance_service, crew):
    _day(attendance_service, crew, 1, "P")
    _day(attendance_service, crew, 2, "P")
    _day(attendance_service, crew, 3, "OT")
    record = _day(attendance_service, crew, 4, "A")

    assert record.days == {1: S.PRESENT, 2: S.PRESENT, 3: S.OVERTIME, 4: S.ABSENT}
    assert (record.total_on_duty, record.ot_days) == (2, 1)


def test_blank_removes_the_key(attendance_service, crew):
    _day(attendance_service, crew, 5, "P")

    record = _day(attendance_service, crew, 5, "blank")

    assert 5 not in record.days
    assert record.total_on_duty == 0
    assert attendance_service.get_record(crew.id, 2, 2024).days == {}


def test_blank_clear_is_idempotent(attendance_service, crew):
    _day(attendance_service, crew, 1, "P")

    first = _day(attendance_service, crew, 9, "blank")
    second = _day(attendance_service, crew, 9, "")

    assert first.days == second.days == {1: S.PRESENT}


def test_present_with_shift_sets_the_shift(attendance_service, crew):
    _day(attendance_service, crew, 1, "P", shift="D")
    _day(attendance_service, crew, 2, "OT", shift="N")

    shifts = attendance_service.get_shift_record(crew.id, 2, 2024)

    assert shifts.days == {1: ShiftCode.DAY, 2: ShiftCode.NIGHT}
    assert shifts.total_on_duty == 2


def test_absent_clears_existing_shift(attendance_service, crew):
    _day(attendance_service, crew, 1, "P", shift="D")

    _day(attendance_service, crew, 1, "A")

    assert attendance_service.get_shift_record(crew.id, 2, 2024).days == {}
    assert not attendance_service.can_enter_shift(crew.id, 2, 2024, 1)


@pytest.mark.parametrize("status", ["L", "H", "blank"])
def test_any_non_working_status_clears_shift(attendance_service, crew, status):
    _day(attendance_service, crew, 1, "OT", shift="N")

    _day(attendance_service, crew, 1, status)

    assert 1 not in attendance_service.get_shift_record(crew.id, 2, 2024).days


def test_present_without_shift_keeps_existing_shift(attendance_service, crew):
    _day(attendance_service, crew, 1, "P", shift="N")

    _day(attendance_service, crew, 1, "OT")

    assert attendance_service.get_shift_record(crew.id, 2, 2024).days == {1: ShiftCode.NIGHT}


def test_range_applies_status_and_shift_to_every_day(attendance_service, crew):
    record = attendance_service.record_attendance_range(
        employee_id=crew.id, month=2, year=2024, start_day=1, end_day=29, status="P", shift="D"
    )

    assert len(record.days) == 29
    assert record.total_on_duty == 29
    assert attendance_service.get_shift_record(crew.id, 2, 2024).total_on_duty == 29


@pytest.mark.parametrize("start,end", [(0, 5), (5, 30), (10, 9), (-1, -1), ("a", 3)])
def test_invalid_range_is_rejected_before_any_write(attendance_service, attendance_repo, crew, start, end):
    with pytest.raises(ValidationError):
        attendance_service.record_attendance_range(
            employee_id=crew.id, month=2, year=2024, start_day=start, end_day=end, status="P"
        )

    assert attendance_repo.upserts == 0


@pytest.mark.parametrize("month,year", [(0, 2024), (13, 2024), (2, 1899)])
def test_invalid_month_or_year_is_rejected(attendance_service, attendance_repo, crew, month, year):
    with pytest.raises(ValidationError):
        _day(attendance_service, crew, 1, "P", month=month, year=year)

    assert attendance_repo.upserts == 0


def test_day_outside_month_is_rejected(attendance_service, crew):
    with pytest.raises(ValidationError):
        _day(attendance_service, crew, 30, "P")


def test_unknown_status_is_rejected(attendance_service, attendance_repo, crew):
    with pytest.raises(ValidationError):
        _day(attendance_service, crew, 1, "X")

    assert attendance_repo.upserts == 0


def test_unknown_employee_is_not_found(attendance_service):
    with pytest.raises(NotFoundError):
        attendance_service.record_attendance_day(employee_id=99, month=2, year=2024, day=1, status="P")


def test_single_shift_on_non_working_day_is_rejected(attendance_service, crew):
    _day(attendance_service, crew, 1, "A")

    with pytest.raises(ValidationError):
        attendance_service.record_shift_day(employee_id=crew.id, month=2, year=2024, day=1, shift="D")


def test_shift_range_skips_non_working_days(attendance_service, crew):
    _day(attendance_service, crew, 1, "P")
    _day(attendance_service, crew, 2, "A")
    _day(attendance_service, crew, 3, "OT")

    record = attendance_service.record_shift_range(
        employee_id=crew.id, month=2, year=2024, start_day=1, end_day=4, shift="N"
    )

    assert record.days == {1: ShiftCode.NIGHT, 3: ShiftCode.NIGHT}
    assert record.total_on_duty == 2


def test_clearing_a_shift_is_always_allowed(attendance_service, crew):
    _day(attendance_service, crew, 1, "P", shift="D")

    record = attendance_service.record_shift_day(employee_id=crew.id, month=2, year=2024, day=1, shift="blank")

    assert record.days == {}


def test_remarks_keep_the_day_map(attendance_service, crew):
    _day(attendance_service, crew, 1, "P")

    record = attendance_service.update_remarks(employee_id=crew.id, month=2, year=2024, remarks="  crew change  ")

    assert record.remarks == "crew change"
    assert record.days == {1: S.PRESENT}
    assert _day(attendance_service, crew, 2, "A").remarks == "crew change"


def test_unit_of_work_saves_both_records_together(attendance_repo, shift_repo, employees_repo, unit_of_work, crew):
    service = AttendanceService(attendance_repo, shift_repo, employees_repo, unit_of_work=unit_of_work)

    _day(service, crew, 1, "P", shift="D")
    _day(service, crew, 2, "P")

    (first_att, first_shift), (second_att, second_shift) = unit_of_work.saved
    assert first_shift.days == {1: ShiftCode.DAY}
    assert second_shift is None
    assert second_att.total_on_duty == 2


def test_failed_cascade_keeps_attendance_and_queues_reconciliation(attendance_service, shift_repo, crew):
    _day(attendance_service, crew, 1, "P", shift="D")
    shift_repo.fail_writes = True

    record = _day(attendance_service, crew, 2, "OT", shift="N")

    assert record.days == {1: S.PRESENT, 2: S.OVERTIME}
    assert attendance_service.get_shift_record(crew.id, 2, 2024).days == {1: ShiftCode.DAY}
    assert len(attendance_service.pending_reconciliation) == 1

    assert attendance_service.reconcile_pending() == 0
    assert len(attendance_service.pending_reconciliation) == 1

    shift_repo.fail_writes = False
    assert attendance_service.reconcile_pending() == 1
    assert attendance_service.get_shift_record(crew.id, 2, 2024).days == {1: ShiftCode.DAY, 2: ShiftCode.NIGHT}
    assert not attendance_service.pending_reconciliation


def test_concurrent_writes_to_different_days_are_all_kept(attendance_service, crew):
    def worker(day):
        _day(attendance_service, crew, day, "P")

    threads = [threading.Thread(target=worker, args=(d,)) for d in range(1, 21)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    record = attendance_service.get_record(crew.id, 2, 2024)
    assert sorted(record.days) == list(range(1, 21))
    assert record.total_on_duty == 20


def test_write_drops_stored_days_past_month_end(attendance_service, attendance_repo, crew):
    attendance_repo.rows[(crew.id, 2, 2024)] = {
        "attendance_data": '{"30":"P"}',
        "total_on_duty": 1,
        "ot_days": 0,
        "remarks": None,
    }

    with pytest.warns(CorruptDataWarning):
        record = _day(attendance_service, crew, 1, "P")

    assert record.days == {1: S.PRESENT}
    assert attendance_repo.rows[(crew.id, 2, 2024)]["attendance_data"] == '{"1":"P"}'
    assert attendance_repo.rows[(crew.id, 2, 2024)]["total_on_duty"] == 1
