"""Codec for the sparse day maps stored as JSON text.

Stored shape: a JSON object keyed by decimal day strings, e.g. {"1": "P", "3": "OT"}.
Legacy spellings are folded into canonical codes on the way in, so the rest of the
package only ever sees AttendanceStatus / ShiftCode values (plus verbatim unknown
attendance strings).
"""

from __future__ import annotations

import json
import logging
import warnings
from typing import Any, Dict, Mapping, Optional

from ..core.constants import BLANK
from ..core.enums import AttendanceStatus, ShiftCode
from ..core.exceptions import CorruptDataWarning, ValidationError
from .model import DayMap, DayStatus, ShiftMap

logger = logging.getLogger(__name__)

MAX_DAY = 31

STATUS_ALIASES: Dict[str, AttendanceStatus] = {
    "P": AttendanceStatus.PRESENT,
    "PRESENT": AttendanceStatus.PRESENT,
    "A": AttendanceStatus.ABSENT,
    "ABSENT": AttendanceStatus.ABSENT,
    "OT": AttendanceStatus.OVERTIME,
    "OVERTIME": AttendanceStatus.OVERTIME,
    "L": AttendanceStatus.LEAVE,
    "LEAVE": AttendanceStatus.LEAVE,
    "H": AttendanceStatus.HOLIDAY,
    "HOLIDAY": AttendanceStatus.HOLIDAY,
}

SHIFT_ALIASES: Dict[str, ShiftCode] = {
    "D": ShiftCode.DAY,
    "DAY": ShiftCode.DAY,
    "N": ShiftCode.NIGHT,
    "NIGHT": ShiftCode.NIGHT,
}


def normalize_status(value: Any) -> Optional[DayStatus]:
    """Fold a stored value into a canonical status; None means blank.

    Unrecognized non-empty strings are returned verbatim.
    """
    if value is None:
        return None
    if isinstance(value, AttendanceStatus):
        return value
    text = str(value).strip()
    if not text:
        return None
    return STATUS_ALIASES.get(text.upper(), text)


def normalize_shift(value: Any) -> Optional[ShiftCode]:
    if value is None:
        return None
    if isinstance(value, ShiftCode):
        return value
    return SHIFT_ALIASES.get(str(value).strip().upper())


def parse_status_input(value: Any) -> Optional[AttendanceStatus]:
    """Parse a status submitted by a caller. `blank`/empty clears the day.

    Writes accept canonical codes (and their legacy spellings) only.
    """
    if value is None or str(value).strip() == "" or str(value).strip().lower() == BLANK:
        return None
    status = normalize_status(value)
    if not isinstance(status, AttendanceStatus):
        raise ValidationError(f"Unknown attendance status: {value!r}")
    return status


def parse_shift_input(value: Any) -> Optional[ShiftCode]:
    if value is None or str(value).strip() == "" or str(value).strip().lower() == BLANK:
        return None
    shift = normalize_shift(value)
    if shift is None:
        raise ValidationError(f"Unknown shift: {value!r}")
    return shift


def _load_object(payload: Optional[str], *, context: str) -> Dict[str, Any]:
    if payload is None or payload == "":
        return {}
    if isinstance(payload, Mapping):
        return dict(payload)
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        _report_corrupt(context, f"invalid JSON ({e})")
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        _report_corrupt(context, f"expected an object, got {type(data).__name__}")
        return {}
    return data


def _report_corrupt(context: str, reason: str) -> None:
    logger.warning("Corrupt day map for %s: %s; treating as empty", context, reason)
    warnings.warn(f"Corrupt day map for {context}: {reason}", CorruptDataWarning, stacklevel=3)


def _day_key(key: Any, *, context: str, last_day: int) -> Optional[int]:
    try:
        day = int(str(key).strip())
    except ValueError:
        logger.warning("Ignoring non-numeric day key %r in %s", key, context)
        return None
    if day < 1 or day > last_day:
        _report_corrupt(context, f"day {key!r} outside 1..{last_day}, dropped")
        return None
    return day


def decode_attendance_map(
    payload: Optional[str], *, context: str = "attendance record", last_day: int = MAX_DAY
) -> DayMap:
    """Decode a stored attendance map. Keys past `last_day` (the month length) are dropped."""
    days: DayMap = {}
    for key, value in _load_object(payload, context=context).items():
        day = _day_key(key, context=context, last_day=last_day)
        status = normalize_status(value)
        if day is not None and status is not None:
            days[day] = status
    return days


def decode_shift_map(payload: Optional[str], *, context: str = "shift record", last_day: int = MAX_DAY) -> ShiftMap:
    days: ShiftMap = {}
    for key, value in _load_object(payload, context=context).items():
        day = _day_key(key, context=context, last_day=last_day)
        shift = normalize_shift(value)
        if day is None:
            continue
        if shift is None:
            if value not in (None, ""):
                logger.debug("Dropping unknown shift value %r for day %s in %s", value, day, context)
            continue
        days[day] = shift
    return days


def _code(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)


def day_map_to_dict(days: Mapping[int, Any]) -> Dict[str, str]:
    """Plain {"<day>": "<code>"} mapping, days in ascending order."""
    return {str(day): _code(days[day]) for day in sorted(days)}


def encode_day_map(days: Mapping[int, Any]) -> str:
    """Serialize a day map to the stored JSON shape."""
    return json.dumps(day_map_to_dict(days), separators=(",", ":"))
