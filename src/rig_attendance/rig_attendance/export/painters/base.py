from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from ...attendance.model import AttendanceRecord, ShiftAttendanceRecord
from ...employees.model import Employee
from ..layout import PLAIN_ROLES, ColumnRole, ColumnSpec

_COMMON_ROLES = frozenset({ColumnRole.SERIAL, ColumnRole.NAME, ColumnRole.DESIGNATION, ColumnRole.REMARKS})


@dataclass(frozen=True)
class ExportRow:
    serial: int
    employee: Employee
    attendance: AttendanceRecord
    shifts: ShiftAttendanceRecord


@dataclass(frozen=True)
class PaintedCell:
    value: Any
    fill: Optional[str] = None
    bold: bool = False


class RowPainter(ABC):
    """Strategy Pattern: turns one employee row into cell values for a column schema."""

    def paint(self, columns: Sequence[ColumnSpec], row: ExportRow, *, with_colors: bool) -> List[PaintedCell]:
        cells = []
        for column in columns:
            if column.role in _COMMON_ROLES:
                value = self._common_value(column, row)
            else:
                value = self.cell_value(column, row)
            fill = self.fill_color(column, value) if with_colors and value is not None else None
            cells.append(PaintedCell(value=value, fill=fill, bold=self._is_bold(column, value)))
        return cells

    @staticmethod
    def _common_value(column: ColumnSpec, row: ExportRow) -> Any:
        if column.role == ColumnRole.SERIAL:
            return row.serial
        if column.role == ColumnRole.NAME:
            return row.employee.name
        if column.role == ColumnRole.DESIGNATION:
            return row.employee.designation or None
        if column.role == ColumnRole.REMARKS:
            return row.attendance.remarks or None
        return None

    @staticmethod
    def _is_bold(column: ColumnSpec, value: Any) -> bool:
        if column.role == ColumnRole.SERIAL:
            return True
        if column.role in PLAIN_ROLES:
            return False
        return value is not None

    @abstractmethod
    def cell_value(self, column: ColumnSpec, row: ExportRow) -> Any:
        """Value for a day or summary column; None renders an empty cell."""

        raise NotImplementedError

    @abstractmethod
    def fill_color(self, column: ColumnSpec, value: Any) -> Optional[str]:
        raise NotImplementedError
