from __future__ import annotations

from ..core.exceptions import MissingFieldError, ValidationError


def require_non_empty(value: str | None, field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if not value or not value.strip():
        raise MissingFieldError(f"{field_name} is required")
    return value.strip()


def require_int_range(value, field_name: str, *, minimum: int, maximum: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None
    if number != value and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < minimum or number > maximum:
        raise ValidationError(f"{field_name} must be between {minimum} and {maximum}")
    return number


def require_positive(value, field_name: str, *, maximum: float | None = None) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum:g}")
    return number
