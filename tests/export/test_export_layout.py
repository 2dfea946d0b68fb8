from __future__ import annotations

from src.rig_attendance.rig_attendance.core.enums import TableType
from src.rig_attendance.rig_attendance.export.layout import ColumnRole, build_columns


def test_attendance_columns_for_leap_february():
    columns = build_columns(29, TableType.ATTENDANCE)

    assert len(columns) == 3 + 29 + 3
    assert [c.label for c in columns[:4]] == ["SL.NO", "NAME", "DESIGNATION", "1"]
    assert [c.label for c in columns[-3:]] == ["T/ON DUTY", "OT DAYS", "REMARKS"]
    assert [c.day for c in columns if c.role == ColumnRole.DAY] == list(range(1, 30))


def test_shift_columns_pair_day_and_night_per_day():
    columns = build_columns(30, TableType.SHIFTS)

    assert len(columns) == 3 + 60 + 1
    assert [(c.label, c.day) for c in columns[3:7]] == [("D", 1), ("N", 1), ("D", 2), ("N", 2)]
    assert columns[-1].role == ColumnRole.TOTAL_ON_DUTY


def test_day_columns_are_narrower_than_text_columns():
    columns = build_columns(31, TableType.ATTENDANCE)
    name = next(c for c in columns if c.role == ColumnRole.NAME)

    assert all(c.width < name.width for c in columns if c.is_day)
