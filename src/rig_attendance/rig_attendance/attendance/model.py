from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from ..core.enums import AttendanceStatus, ShiftCode

# A stored value that is not one of the canonical codes is kept verbatim (str).
DayStatus = Union[AttendanceStatus, str]
DayMap = Dict[int, DayStatus]
ShiftMap = Dict[int, ShiftCode]


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one month.

    `days` is sparse: a day absent from the map has no status recorded.
    `total_on_duty`/`ot_days` are the stored counters; readers derive totals from `days`.
    """

    employee_id: int
    month: int
    year: int
    days: DayMap = field(default_factory=dict)
    total_on_duty: int = 0
    ot_days: int = 0
    remarks: Optional[str] = None

    @classmethod
    def empty(cls, employee_id: int, month: int, year: int) -> "AttendanceRecord":
        return cls(employee_id=int(employee_id), month=int(month), year=int(year))


@dataclass(frozen=True)
class ShiftAttendanceRecord:
    """Domain entity: one employee's Day/Night shift assignments for one month."""

    employee_id: int
    month: int
    year: int
    days: ShiftMap = field(default_factory=dict)
    total_on_duty: int = 0

    @classmethod
    def empty(cls, employee_id: int, month: int, year: int) -> "ShiftAttendanceRecord":
        return cls(employee_id=int(employee_id), month=int(month), year=int(year))
