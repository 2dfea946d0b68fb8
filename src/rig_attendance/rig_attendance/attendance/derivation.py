from __future__ import annotations

from typing import Mapping, Optional

from ..core.enums import AttendanceStatus, ShiftCode
from .model import DayMap, DayStatus, ShiftMap

SHIFT_ELIGIBLE = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.OVERTIME})


def present_days(days: Mapping[int, DayStatus]) -> int:
    return sum(1 for status in days.values() if status == AttendanceStatus.PRESENT)


def overtime_days(days: Mapping[int, DayStatus]) -> int:
    return sum(1 for status in days.values() if status == AttendanceStatus.OVERTIME)


def shift_on_duty(shifts: Mapping[int, ShiftCode]) -> int:
    """Days with any shift assigned. Not the same metric as present_days."""
    return sum(1 for shift in shifts.values() if shift in (ShiftCode.DAY, ShiftCode.NIGHT))


def is_shift_eligible(status: Optional[DayStatus]) -> bool:
    return status in SHIFT_ELIGIBLE


def can_enter_shift(days: Mapping[int, DayStatus], day: int) -> bool:
    """A shift may be recorded only on a Present or Overtime day."""
    return is_shift_eligible(days.get(int(day)))


def apply_status(days: DayMap, day: int, status: Optional[AttendanceStatus]) -> None:
    """Set or clear one day in place. None clears the day (removes the key)."""
    if status is None:
        days.pop(int(day), None)
    else:
        days[int(day)] = status


def apply_shift(shifts: ShiftMap, day: int, shift: Optional[ShiftCode]) -> None:
    if shift is None:
        shifts.pop(int(day), None)
    else:
        shifts[int(day)] = shift


def effective_shift(days: Mapping[int, DayStatus], shifts: Mapping[int, ShiftCode], day: int) -> Optional[ShiftCode]:
    """Shift shown for a day: only when attendance allows it."""
    if not can_enter_shift(days, day):
        return None
    return shifts.get(int(day))
