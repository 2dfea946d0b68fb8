from __future__ import annotations

from typing import Any, Optional

from ...attendance.derivation import effective_shift
from ...core.enums import ShiftCode
from ..layout import ColumnRole, ColumnSpec
from .base import ExportRow, RowPainter

PRESENT_MARKER = "P"

DAY_SHIFT_FILL = "FCE4D6"
NIGHT_SHIFT_FILL = "D9E1F2"

_COLUMN_SHIFT = {
    ColumnRole.DAY_SHIFT: ShiftCode.DAY,
    ColumnRole.NIGHT_SHIFT: ShiftCode.NIGHT,
}


class ShiftPainter(RowPainter):
    """Day/Night grid: a marker where the employee worked that shift."""

    def cell_value(self, column: ColumnSpec, row: ExportRow) -> Any:
        attendance = row.attendance.days
        shifts = row.shifts.days
        if column.role in _COLUMN_SHIFT:
            shift = effective_shift(attendance, shifts, column.day)
            return PRESENT_MARKER if shift == _COLUMN_SHIFT[column.role] else None
        if column.role == ColumnRole.TOTAL_ON_DUTY:
            # Only days that actually render a marker count.
            return sum(1 for day in shifts if effective_shift(attendance, shifts, day) is not None)
        return None

    def fill_color(self, column: ColumnSpec, value: Any) -> Optional[str]:
        if column.role == ColumnRole.DAY_SHIFT:
            return DAY_SHIFT_FILL
        if column.role == ColumnRole.NIGHT_SHIFT:
            return NIGHT_SHIFT_FILL
        return None
