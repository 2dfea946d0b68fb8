from __future__ import annotations

from typing import Iterable

from ...core.enums import ShiftCode
from ..derivation import apply_shift, can_enter_shift
from ..model import DayMap, ShiftMap
from .base import ShiftCascadeStrategy


class AssignShiftStrategy(ShiftCascadeStrategy):
    """Present/Overtime with a shift: record that shift on each eligible day."""

    def __init__(self, shift: ShiftCode):
        self.shift = shift

    def apply(self, *, days: DayMap, shifts: ShiftMap, changed_days: Iterable[int]) -> None:
        for day in changed_days:
            if can_enter_shift(days, day):
                apply_shift(shifts, day, self.shift)
