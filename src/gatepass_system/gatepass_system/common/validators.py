from __future__ import annotations

import math
from typing import Any, Union

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_hours(value: Any, field_name: str = "duration") -> Union[int, float]:
    """Accept ints, floats and numeric strings; keep whole numbers as int."""
    if value is None or isinstance(value, bool) or str(value).strip() == "":
        raise ValidationError(f"{field_name} is required")
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number of hours")
    if not math.isfinite(hours) or hours <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return int(hours) if hours.is_integer() else hours
