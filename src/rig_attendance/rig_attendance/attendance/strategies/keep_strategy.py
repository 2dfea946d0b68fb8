from __future__ import annotations

from typing import Iterable

from ..model import DayMap, ShiftMap
from .base import ShiftCascadeStrategy


class KeepShiftStrategy(ShiftCascadeStrategy):
    """Present/Overtime without a shift: existing assignments stay as they are."""

    touches_shifts = False

    def apply(self, *, days: DayMap, shifts: ShiftMap, changed_days: Iterable[int]) -> None:
        return None
