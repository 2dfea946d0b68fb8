from __future__ import annotations

from typing import Iterable

from ..derivation import apply_shift
from ..model import DayMap, ShiftMap
from .base import ShiftCascadeStrategy


class ClearShiftStrategy(ShiftCascadeStrategy):
    """Any status other than Present/Overtime (including blank and Absent) drops the day's shift."""

    def apply(self, *, days: DayMap, shifts: ShiftMap, changed_days: Iterable[int]) -> None:
        for day in changed_days:
            apply_shift(shifts, day, None)
