from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Canonical day status codes stored in attendance day maps."""

    PRESENT = "P"
    ABSENT = "A"
    OVERTIME = "OT"
    LEAVE = "L"
    HOLIDAY = "H"


class ShiftCode(str, Enum):
    """Shift assignment for a worked day."""

    DAY = "D"
    NIGHT = "N"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class TableType(str, Enum):
    """Export layout: plain attendance grid or Day/Night shift grid."""

    ATTENDANCE = "attendance"
    SHIFTS = "shifts"


class ExportFormat(str, Enum):
    """Output document for an export; independent of TableType."""

    XLSX = "xlsx"
    PDF = "pdf"
