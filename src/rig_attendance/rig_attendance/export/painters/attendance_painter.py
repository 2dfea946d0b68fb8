from __future__ import annotations

from typing import Any, Optional

from ...attendance.derivation import overtime_days, present_days
from ...core.enums import AttendanceStatus
from ..layout import ColumnRole, ColumnSpec
from .base import ExportRow, RowPainter

STATUS_FILLS = {
    AttendanceStatus.PRESENT.value: "C6EFCE",
    AttendanceStatus.ABSENT.value: "FFC7CE",
    AttendanceStatus.OVERTIME.value: "FFEB9C",
    AttendanceStatus.LEAVE.value: "BDD7EE",
    AttendanceStatus.HOLIDAY.value: "D9D9D9",
}


class AttendancePainter(RowPainter):
    def cell_value(self, column: ColumnSpec, row: ExportRow) -> Any:
        days = row.attendance.days
        if column.role == ColumnRole.DAY:
            status = days.get(column.day)
            if status is None:
                return None
            # Unrecognized stored strings pass through verbatim.
            return status.value if isinstance(status, AttendanceStatus) else str(status)
        if column.role == ColumnRole.TOTAL_ON_DUTY:
            return present_days(days)
        if column.role == ColumnRole.OT_DAYS:
            return overtime_days(days)
        return None

    def fill_color(self, column: ColumnSpec, value: Any) -> Optional[str]:
        if column.role != ColumnRole.DAY:
            return None
        return STATUS_FILLS.get(value)
