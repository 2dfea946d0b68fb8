from __future__ import annotations

from typing import Any

from ..core.constants import MIN_YEAR
from ..core.exceptions import ValidationError
from .datetime_utils import days_in_month


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def require_bool(value: Any, field_name: str) -> bool:
    """JSON booleans, 0/1, or the usual on/off words; anything else is rejected."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValidationError(f"{field_name} must be true or false")


def require_month_year(month: Any, year: Any) -> tuple[int, int]:
    month = require_int(month, "Month")
    year = require_int(year, "Year")
    if month < 1 or month > 12:
        raise ValidationError("Month must be between 1 and 12")
    if year < MIN_YEAR:
        raise ValidationError(f"Year must be {MIN_YEAR} or later")
    return month, year


def require_day_range(start_day: Any, end_day: Any, *, month: int, year: int) -> range:
    """Validate an inclusive day range against the calendar month."""
    start_day = require_int(start_day, "Start day")
    end_day = require_int(end_day, "End day")
    last = days_in_month(month, year)
    if start_day < 1 or end_day > last or start_day > end_day:
        raise ValidationError(f"Day range must satisfy 1 <= start <= end <= {last}")
    return range(start_day, end_day + 1)


def require_day(day: Any, *, month: int, year: int) -> int:
    return require_day_range(day, day, month=month, year=year)[0]
