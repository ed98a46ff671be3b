from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_negative(value: float, field_name: str) -> float:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return value


def require_positive(value: float, field_name: str) -> float:
    if value is None or value <= 0:
        raise ValidationError(f"{field_name} must be > 0")
    return value


def require_range(value: float, field_name: str, low: float, high: float) -> float:
    if value is None or not (low <= value <= high):
        raise ValidationError(f"{field_name} must be within [{low}, {high}]")
    return value


def optional_float(value: object, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field_name} must be a number") from e
