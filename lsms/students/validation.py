import math
from typing import Any, Mapping

from lsms.config.levels import Level, ROLL_RANGES, TRACKED_MARK_FIELDS
from lsms.exceptions import ValidationError, RangeViolation


def parse_level(raw: Any) -> Level:
    """Accept "200" or 200; anything else is rejected before storage is touched."""
    if raw is None or isinstance(raw, bool):
        raise ValidationError("Invalid or missing level.")
    try:
        return Level(str(raw).strip())
    except ValueError:
        raise ValidationError("Invalid or missing level.")


def parse_roll_number(level: Level, raw: Any) -> int:
    min_roll, max_roll = ROLL_RANGES[level]
    roll = coerce_roll(raw)
    if roll is None or roll < min_roll or roll > max_roll:
        raise RangeViolation(level.value, min_roll, max_roll)
    return roll


def coerce_roll(raw: Any):
    """Integer value of a stored or submitted roll number, or None if it has none."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def _mark_value(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        mark = float(value)
    except (TypeError, ValueError):
        return 0.0
    return mark if math.isfinite(mark) else 0.0


def compute_average(record: Mapping[str, Any]) -> float:
    """Mean of the tracked subject marks; a missing or non-numeric mark counts as zero."""
    marks = [_mark_value(record.get(field)) for field in TRACKED_MARK_FIELDS]
    return sum(marks) / len(TRACKED_MARK_FIELDS)
