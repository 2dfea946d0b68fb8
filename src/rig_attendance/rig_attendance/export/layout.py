"""Column schema for the XLSX export.

The schema is computed from (days_in_month, table_type) before any row is painted,
so the painters and the workbook writer only walk a fixed list of columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..core.enums import TableType


class ColumnRole(str, Enum):
    SERIAL = "serial"
    NAME = "name"
    DESIGNATION = "designation"
    DAY = "day"
    DAY_SHIFT = "day_shift"
    NIGHT_SHIFT = "night_shift"
    TOTAL_ON_DUTY = "total_on_duty"
    OT_DAYS = "ot_days"
    REMARKS = "remarks"


DAY_ROLES = frozenset({ColumnRole.DAY, ColumnRole.DAY_SHIFT, ColumnRole.NIGHT_SHIFT})

# Never bold, whatever they hold.
PLAIN_ROLES = frozenset({ColumnRole.NAME, ColumnRole.DESIGNATION, ColumnRole.REMARKS})

SERIAL_WIDTH = 7
NAME_WIDTH = 26
DESIGNATION_WIDTH = 18
DAY_WIDTH = 4.5
SHIFT_WIDTH = 3.5
SUMMARY_WIDTH = 11
REMARKS_WIDTH = 26


@dataclass(frozen=True)
class ColumnSpec:
    label: str
    width: float
    role: ColumnRole
    day: Optional[int] = None

    @property
    def is_day(self) -> bool:
        return self.role in DAY_ROLES


def _leading() -> List[ColumnSpec]:
    return [
        ColumnSpec("SL.NO", SERIAL_WIDTH, ColumnRole.SERIAL),
        ColumnSpec("NAME", NAME_WIDTH, ColumnRole.NAME),
        ColumnSpec("DESIGNATION", DESIGNATION_WIDTH, ColumnRole.DESIGNATION),
    ]


def build_columns(days: int, table_type: TableType) -> List[ColumnSpec]:
    columns = _leading()
    if table_type == TableType.SHIFTS:
        for day in range(1, days + 1):
            columns.append(ColumnSpec("D", SHIFT_WIDTH, ColumnRole.DAY_SHIFT, day))
            columns.append(ColumnSpec("N", SHIFT_WIDTH, ColumnRole.NIGHT_SHIFT, day))
        columns.append(ColumnSpec("T/ON DUTY", SUMMARY_WIDTH, ColumnRole.TOTAL_ON_DUTY))
        return columns

    for day in range(1, days + 1):
        columns.append(ColumnSpec(str(day), DAY_WIDTH, ColumnRole.DAY, day))
    columns.append(ColumnSpec("T/ON DUTY", SUMMARY_WIDTH, ColumnRole.TOTAL_ON_DUTY))
    columns.append(ColumnSpec("OT DAYS", SUMMARY_WIDTH, ColumnRole.OT_DAYS))
    columns.append(ColumnSpec("REMARKS", REMARKS_WIDTH, ColumnRole.REMARKS))
    return columns


def header_row_count(table_type: TableType) -> int:
    """Shift grids need a second header row for the D/N labels."""
    return 2 if table_type == TableType.SHIFTS else 1
