from __future__ import annotations

import math

from ..core.constants import MAX_WEIGHT
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} tối thiểu {min_len} ký tự")
    return value


def require_non_negative(value, field_name: str) -> float:
    """Coerce to float; reject NaN/inf and values below zero."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} phải là số")
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f"{field_name} phải là số hữu hạn")
    if number < 0:
        raise ValidationError(f"{field_name} không được âm")
    return number


def require_weight(value, field_name: str = "Tỷ trọng") -> float:
    number = require_non_negative(value, field_name)
    if number > MAX_WEIGHT:
        raise ValidationError(f"{field_name} tối đa {MAX_WEIGHT:g}")
    return number


_BOOL_TEXT = {"true": True, "false": False}


def require_bool(value, field_name: str) -> bool:
    """Accept a real bool or the text ``"true"``/``"false"``; ``bool("false")`` would be True."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _BOOL_TEXT:
        return _BOOL_TEXT[value.strip().lower()]
    raise ValidationError(f"{field_name} phải là true/false")
