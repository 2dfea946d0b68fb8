from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..model import DayMap, ShiftMap


class ShiftCascadeStrategy(ABC):
    """Strategy Pattern: how an attendance change carries over to the shift map."""

    #: False when the strategy never touches the shift record (no read, no write).
    touches_shifts: bool = True

    @abstractmethod
    def apply(self, *, days: DayMap, shifts: ShiftMap, changed_days: Iterable[int]) -> None:
        """Mutate `shifts` in place for the changed days; `days` is the updated attendance map."""

        raise NotImplementedError
