from __future__ import annotations

from typing import Iterable, List, Optional

from ..core.constants import DESIGNATION_RANKS, UNRANKED_DESIGNATION
from .model import Employee


def designation_rank(designation: Optional[str]) -> int:
    """Sort rank for a job title; unknown, empty or missing titles sort last."""
    if not designation:
        return UNRANKED_DESIGNATION
    return DESIGNATION_RANKS.get(designation, UNRANKED_DESIGNATION)


def sort_key(employee: Employee) -> tuple[int, str]:
    return (employee.designation_order, employee.name)


def sort_employees(employees: Iterable[Employee]) -> List[Employee]:
    return sorted(employees, key=sort_key)
