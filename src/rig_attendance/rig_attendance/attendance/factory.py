from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus, ShiftCode
from .derivation import is_shift_eligible
from .strategies.assign_strategy import AssignShiftStrategy
from .strategies.base import ShiftCascadeStrategy
from .strategies.clear_strategy import ClearShiftStrategy
from .strategies.keep_strategy import KeepShiftStrategy


@dataclass
class ShiftCascadeFactory:
    """Factory Pattern: choose the cascade for an attendance write."""

    def for_status(self, *, status: Optional[AttendanceStatus], shift: Optional[ShiftCode]) -> ShiftCascadeStrategy:
        if not is_shift_eligible(status):
            return ClearShiftStrategy()
        if shift is None:
            return KeepShiftStrategy()
        return AssignShiftStrategy(shift)
